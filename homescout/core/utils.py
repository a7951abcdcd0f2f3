import hashlib

def place_parts(city: str, region: str, normalize: bool = False) -> tuple[str, str]:
    """
    The (city, region) pair a lookup uses. Inputs are returned verbatim
    unless ``normalize`` is set, in which case whitespace is trimmed and
    collapsed, the city is title-cased and the region upper-cased
    ("  buena   park ", "ca" -> "Buena Park", "CA").
    """
    if normalize:
        city = " ".join(city.split()).title()
        region = " ".join(region.split()).upper()
    return city, region

def place_key(city: str, region: str, normalize: bool = False) -> str:
    """Join a city and region into a lookup key, "<city>, <region>"."""
    city, region = place_parts(city, region, normalize)
    return f"{city}, {region}"

def split_place_key(key: str) -> tuple[str, str]:
    """
    Inverse of place_key. The region is taken after the last ", " so a
    city such as "Washington, D.C." survives the round trip.
    """
    city, _, region = key.rpartition(", ")
    return city, region

def dollars(amount: int) -> str:
    """Whole-dollar currency string, e.g. 98000 -> "$98,000"."""
    return f"${amount:,.0f}"

def weak_etag(payload_bytes: bytes) -> str:
    """Weak ETag for client-side conditional requests."""
    h = hashlib.sha256(payload_bytes).hexdigest()[:24]
    return f'W/"{h}"'
