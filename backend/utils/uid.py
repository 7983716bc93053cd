# backend/utils/uid.py
import random
import re
import string

UID_PATTERN = re.compile(r"^[A-Z]{2}[0-9]{8}$")

# Generates a short attendee identifier such as "AB12345678".
# Not cryptographically secure; uniqueness is checked against the user store.
def generate_uid(rng: random.Random = None) -> str:
    rng = rng or random
    letters = "".join(rng.choice(string.ascii_uppercase) for _ in range(2))
    digits = "".join(rng.choice(string.digits) for _ in range(8))
    return letters + digits
