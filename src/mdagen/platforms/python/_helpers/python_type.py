"""``python_type`` helper: maps model type names to Python annotations.

Names that are not primitive types (class names) pass through unchanged.
"""

TYPE_MAP = {
    "boolean": "bool",
    "bool": "bool",
    "int": "int",
    "integer": "int",
    "long": "int",
    "float": "float",
    "double": "float",
    "string": "str",
    "str": "str",
    "bytes": "bytes",
}


def python_type(type_name):
    if not type_name:
        return "object"
    return TYPE_MAP.get(str(type_name).lower(), str(type_name))
