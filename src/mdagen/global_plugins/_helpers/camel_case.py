"""``camel_case`` helper: ``order_line`` -> ``orderLine``."""

import re


def camel_case(value):
    parts = [p for p in re.split(r"[_\s\-]+", str(value)) if p]
    if not parts:
        return ""
    return parts[0][:1].lower() + parts[0][1:] + "".join(p[:1].upper() + p[1:] for p in parts[1:])
