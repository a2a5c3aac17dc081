# seamless_player/utils/formatting.py


def format_on_off(flag: bool) -> str:
    return "ON" if flag else "OFF"

def format_file_counter(current_index: int, total: int) -> str:
    """Formats the 1-based position label, e.g. "3/12"; "0/0" when nothing is loaded."""
    if total <= 0:
        return "0/0"
    return f"{current_index + 1}/{total}"

def format_info_label(total: int, loop: bool, shuffle: bool) -> str:
    return f"Files: {total} | Loop: {format_on_off(loop)} | Random: {format_on_off(shuffle)}"

def parse_track_number(text) -> int | None:
    """Parses a "go to" entry into an int, or None when it is not a whole number."""
    if text is None:
        return None
    text = str(text).strip()
    if not text.isdecimal():
        return None
    try:
        return int(text)
    except ValueError:
        return None
