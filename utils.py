"""
Console tracing shared by the engine, manager and controllers.
Lines carry a bracketed tag such as [ENGINE] or [AI].
"""

def safe_print(msg):
    """
    Write a trace line to stdout. Player names come from HTTP requests and may
    hold characters a latin-1 or ascii console cannot encode; those become '?'.
    """
    try:
        print(msg)
    except UnicodeEncodeError:
        print(msg.encode('ascii', errors='replace').decode('ascii'))
