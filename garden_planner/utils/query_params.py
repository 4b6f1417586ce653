"""
Boolean query flags (confirm_regenerate, confirm_plant_removal).
A flag may arrive as the raw string "false"; plain truthiness would treat it as set.
"""


def ensure_bool_query(value: bool | str | None) -> bool:
    """
    True only for True or the strings "true"/"1"/"yes" (case-insensitive).
    "false", "0", "no", "", None => False.
    """
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    s = str(value).strip().lower()
    return s in ("true", "1", "yes")
