def helper(value):
    """Upper-case the first letter: ``order`` -> ``Order``."""
    text = str(value)
    return text[:1].upper() + text[1:]
