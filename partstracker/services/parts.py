"""Car part CRUD."""

from typing import List

from partstracker.errors import ErrorKind, ServiceError, store_guard
from partstracker.extensions import db
from partstracker.models import CarPart, PartProject
from partstracker.utils.logging import get_logger
from partstracker.utils.validation import is_url, is_valid_name, parse_part_number, string_is_empty

logger = get_logger(__name__)

DEFAULT_CONDITION = "unknown"
MAX_CONDITION_LENGTH = 50

INVALID_INPUT_MESSAGE = "Invalid input, check that all fields are alpha numeric where applicable."


def _require_part_number(part_number) -> int:
    number = parse_part_number(part_number)
    if number is None:
        raise ServiceError(ErrorKind.VALIDATION, INVALID_INPUT_MESSAGE)
    return number


def create_part(part_number, name, condition=None, image=None) -> dict:
    number = _require_part_number(part_number)
    if not is_valid_name(name):
        raise ServiceError(ErrorKind.VALIDATION, INVALID_INPUT_MESSAGE)

    if string_is_empty(condition):
        condition = DEFAULT_CONDITION
        logger.info("Setting condition to 'unknown'", part_number=number)
    elif not isinstance(condition, str) or len(condition) > MAX_CONDITION_LENGTH:
        raise ServiceError(ErrorKind.VALIDATION, INVALID_INPUT_MESSAGE)

    if image is not None and not is_url(image):
        image = None
        logger.info("Setting image to null", part_number=number)
    elif image is not None:
        image = image.strip()

    with store_guard("create_part"):
        if db.session.get(CarPart, number) is not None:
            raise ServiceError(ErrorKind.INTEGRITY, f"Part #{number} already exists")

        part = CarPart(part_number=number, name=name.strip(), condition=condition.strip(), image=image)
        db.session.add(part)
        db.session.commit()

    logger.info("Car part created", part_number=number, name=part.name, condition=part.condition)
    return part.to_dict()


def find_part(part_number) -> List[dict]:
    """Matching parts as a list; empty when the part number is unknown."""
    number = _require_part_number(part_number)
    with store_guard("find_part"):
        part = db.session.get(CarPart, number)
    return [part.to_dict()] if part is not None else []


def list_parts() -> List[dict]:
    with store_guard("list_parts"):
        parts = CarPart.query.order_by(CarPart.part_number).all()
    return [part.to_dict() for part in parts]


def part_exists(part_number) -> bool:
    number = parse_part_number(part_number)
    if number is None:
        return False
    with store_guard("part_exists"):
        return db.session.get(CarPart, number) is not None


def update_part_name(part_number, name) -> dict:
    number = _require_part_number(part_number)
    if not is_valid_name(name):
        raise ServiceError(ErrorKind.VALIDATION, INVALID_INPUT_MESSAGE)

    with store_guard("update_part_name"):
        part = db.session.get(CarPart, number)
        if part is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Could not find part #{number}")

        part.name = name.strip()
        db.session.commit()

    logger.info("Car part renamed", part_number=number, name=part.name)
    return part.to_dict()


def delete_part(part_number) -> dict:
    number = _require_part_number(part_number)

    with store_guard("delete_part"):
        part = db.session.get(CarPart, number)
        if part is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Could not find part #{number}")

        # Detach from every project before the part row goes
        removed = PartProject.query.filter_by(part_number=number).delete(synchronize_session=False)
        db.session.flush()
        db.session.delete(part)
        db.session.commit()

    logger.info("Car part deleted", part_number=number, detached_from_projects=removed)
    return {"part_number": number}
