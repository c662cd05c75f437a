"""``snake_case`` helper: ``OrderLine`` -> ``order_line``."""

import re


def snake_case(value):
    text = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", str(value))
    return re.sub(r"[\s\-]+", "_", text).lower()
