"""
Test fixtures.
"""
import pytest
import json
from datetime import datetime, timezone
from pathlib import Path
from wssec.clock import FixedClock
from wssec.schemas import ValidationPolicy
from wssec.verification import TimestampProcessor

# Instant the vectors were generated at
NOW = datetime(2026, 1, 15, 10, 0, 0, tzinfo=timezone.utc)
POLICY_TTL = 300

# Vectors directory relative to this file
VECTORS_DIR = Path(__file__).parent.parent / "vectors"

@pytest.fixture
def now():
    return NOW

@pytest.fixture
def policy():
    return ValidationPolicy(ttl_seconds=POLICY_TTL)

@pytest.fixture
def clock():
    return FixedClock(NOW)

@pytest.fixture
def processor(policy, clock):
    return TimestampProcessor(policy, clock)

def load_vector(name: str) -> dict:
    """Load a JSON test vector."""
    with open(VECTORS_DIR / name, "r") as f:
        return json.load(f)

def load_xml_vector(name: str) -> bytes:
    """Load an XML test vector as raw bytes."""
    with open(VECTORS_DIR / name, "rb") as f:
        return f.read()
