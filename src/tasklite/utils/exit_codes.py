"""Process exit codes for the TaskLite CLI.

Scripts can tell a lapsed session from an unreachable backend without parsing
output:

==  ============================================================
0   success
1   unexpected failure
2   bad arguments, or a task form that does not validate
3   not signed in, session expired (401) or credentials rejected
4   backend unreachable or answered with an error status
5   task id not on the loaded board
==  ============================================================
"""

SUCCESS = 0
ERROR_GENERAL = 1
ERROR_INVALID_ARGS = 2
ERROR_AUTH_FAILURE = 3
ERROR_NETWORK = 4
ERROR_NOT_FOUND = 5

_NAMES = {
    SUCCESS: "SUCCESS",
    ERROR_GENERAL: "ERROR_GENERAL",
    ERROR_INVALID_ARGS: "ERROR_INVALID_ARGS",
    ERROR_AUTH_FAILURE: "ERROR_AUTH_FAILURE",
    ERROR_NETWORK: "ERROR_NETWORK",
    ERROR_NOT_FOUND: "ERROR_NOT_FOUND",
}


def exit_code_name(code: int) -> str:
    """``ERROR_NETWORK`` for 4, ``UNKNOWN(n)`` for codes not listed above."""
    return _NAMES.get(code, f"UNKNOWN({code})")
