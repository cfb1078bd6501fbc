"""Masking helpers for sensitive values written to logs"""


def mask_phone_number(phone: str) -> str:
    """Keep the first and last two characters; numbers of 4 or fewer characters are returned as-is"""
    if len(phone) <= 4:
        return phone
    return phone[:2] + "*" * (len(phone) - 4) + phone[-2:]
