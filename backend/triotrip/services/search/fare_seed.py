"""Fare seed — deterministic baseline fare for a route and departure date."""

HASH_MULTIPLIER = 33
HASH_MODULUS = 9973

FARE_BAND_MIN = 120
FARE_BAND_SIZE = 160  # seeds fall in 120..279


def fare_seed(origin: str, destination: str, depart_date: str) -> int:
    """Same (origin, destination, date) always yields the same fare."""
    acc = 0
    for ch in f"{origin}{destination}{depart_date}":
        acc = (acc * HASH_MULTIPLIER + ord(ch)) % HASH_MODULUS
    return FARE_BAND_MIN + acc % FARE_BAND_SIZE
