# backend/utils/validators.py
import re

# Thai mobile numbers: +66 or a leading 0 followed by 8-9 digits
PHONE_PATTERN = re.compile(r"^(\+66|0)\d{8,9}$")

def is_valid_phone(phone: str) -> bool:
    return bool(phone) and PHONE_PATTERN.match(phone) is not None
