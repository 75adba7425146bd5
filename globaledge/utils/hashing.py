import hashlib, json

def payload_hash(payload: dict) -> str:
    """Stable digest of a JSON-able payload, used for cache keys."""
    s = json.dumps(payload, sort_keys=True, default=str)
    return hashlib.sha256(s.encode()).hexdigest()
