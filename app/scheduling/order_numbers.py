"""Order number generation"""
import os
import time
from uuid import uuid4


def generate_order_number() -> str:
    """Timestamp-based order number with a random suffix, e.g. ORD-1718000000000-3fa2c1"""
    prefix = os.getenv("ORDER_NUMBER_PREFIX", "ORD")
    return f"{prefix}-{int(time.time() * 1000)}-{uuid4().hex[:6]}"
