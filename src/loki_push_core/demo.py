"""Generates realistic synthetic business-operation logs."""

import logging
import random
import time
import uuid
from dataclasses import dataclass
from typing import Callable, Optional

from .sinks import Sink

logger = logging.getLogger(__name__)

ENTITIES = ["Contact", "Account", "Opportunity", "Lead", "Case", "Product", "Order", "Invoice"]
OPERATIONS = [
    "Create", "Update", "Delete", "Read", "Search",
    "Export", "Import", "Validate", "Process", "Archive",
]
USERS = [
    "john.doe", "jane.smith", "bob.wilson", "alice.johnson",
    "charlie.brown", "diana.prince", "bruce.wayne", "peter.parker",
]
STATUSES = ["Success", "Failed", "Pending", "Cancelled", "In Progress", "Completed", "Error", "Warning"]

# Operations that also emit a debug line with a result count
QUERY_OPERATIONS = ("Search", "Export")


@dataclass(frozen=True)
class BusinessOperation:
    operation: str
    entity: str
    entity_id: str
    user: str
    user_id: str
    elapsed_ms: int
    status: str


def determine_level(rng: random.Random) -> str:
    """Pick a level with a 90% info / 5% warning / 5% error split."""
    roll = rng.randint(1, 100)
    if roll <= 90:
        return "info"
    if roll <= 95:
        return "warning"
    return "error"


def business_operation(rng: random.Random) -> BusinessOperation:
    return BusinessOperation(
        operation=rng.choice(OPERATIONS),
        entity=rng.choice(ENTITIES),
        entity_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        user=rng.choice(USERS),
        user_id=str(uuid.UUID(int=rng.getrandbits(128), version=4)),
        elapsed_ms=rng.randint(50, 1999),
        status=rng.choice(STATUSES),
    )


def log_business_operation(sink: Sink, op: BusinessOperation, level: str) -> None:
    """Emit one business operation at *level* with its structured fields."""
    if level == "warning":
        outcome = "operation completed with warning"
    elif level == "error":
        outcome = "operation failed"
    else:
        outcome = "operation completed"

    sink.emit(
        level,
        f"{op.operation} {op.entity} {outcome}.",
        {
            "EntityId": op.entity_id,
            "UserId": op.user_id,
            "User": op.user,
            "ElapsedTime": f"{op.elapsed_ms}ms",
            "Status": op.status,
        },
    )


def generate_logs(
    sink: Sink,
    count: int,
    rng: Optional[random.Random] = None,
    delay: Optional[tuple[float, float]] = (0.2, 0.8),
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Emit *count* random business operations to *sink*.

    Returns the number of records emitted, including debug lines.
    Pass ``delay=None`` to run without pauses between operations.
    """
    rng = rng or random.Random()
    emitted = 0

    logger.info("Generating %d realistic business logs...", count)
    for i in range(1, count + 1):
        op = business_operation(rng)
        log_business_operation(sink, op, determine_level(rng))
        emitted += 1

        if op.operation in QUERY_OPERATIONS:
            sink.emit(
                "debug",
                f"{op.operation} {op.entity} returned {rng.randint(0, 999)} results.",
                {"UserId": op.user_id, "ElapsedTime": f"{op.elapsed_ms}ms"},
            )
            emitted += 1

        if count > 20 and i % 10 == 0:
            logger.info("Progress: %d/%d logs generated...", i, count)

        if delay is not None:
            sleep(rng.uniform(*delay))

    logger.info("Generated %d logs successfully", count)
    return emitted
