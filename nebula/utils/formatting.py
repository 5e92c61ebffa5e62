def format_megabytes(bytes_value):
    try:
        megabytes = float(bytes_value) / 1024 / 1024
    except (TypeError, ValueError):
        return "?"
    return f"{megabytes:.2f} MB"


def clean_cell(text, default: str = "?"):
    if text is None:
        return default
    text = " ".join(str(text).split())
    return text or default
