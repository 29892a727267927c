"""Projects and their associations with parts and users.

Association rows are only written when both endpoints exist. The check and
the write are a single ``INSERT ... SELECT ... WHERE EXISTS`` statement, and
the foreign keys on the association tables back it up in the database.
"""

from typing import List, Optional

from sqlalchemy import Integer, insert, literal, select

from partstracker.errors import ErrorKind, ServiceError, store_guard
from partstracker.extensions import db
from partstracker.models import CarPart, PartProject, Project, User, UserProject
from partstracker.services import parts as parts_service
from partstracker.services import users as users_service
from partstracker.utils.logging import get_logger
from partstracker.utils.validation import parse_identifier, parse_part_number, string_is_empty

logger = get_logger(__name__)

MAX_PROJECT_NAME_LENGTH = 50
MAX_DESCRIPTION_LENGTH = 255


def _require_project_id(project_id) -> int:
    pid = parse_identifier(project_id)
    if pid is None:
        raise ServiceError(ErrorKind.VALIDATION, f"Invalid project id {project_id!r}")
    return pid


def _require_part_number(part_number) -> int:
    number = parse_part_number(part_number)
    if number is None:
        raise ServiceError(ErrorKind.VALIDATION, f"Invalid part number {part_number!r}")
    return number


def _check_project_fields(name, description):
    if string_is_empty(name) or not isinstance(name, str) or len(name.strip()) > MAX_PROJECT_NAME_LENGTH:
        raise ServiceError(ErrorKind.VALIDATION, "Project name is required (50 characters max)")
    if description is not None and (not isinstance(description, str) or len(description) > MAX_DESCRIPTION_LENGTH):
        raise ServiceError(ErrorKind.VALIDATION, "Project description is limited to 255 characters")


def project_exists(project_id) -> bool:
    pid = parse_identifier(project_id)
    if pid is None:
        return False
    with store_guard("project_exists"):
        return db.session.get(Project, pid) is not None


def is_member(project_id, username) -> bool:
    """True when the user shares the project through a UserProject row."""
    pid = parse_identifier(project_id)
    if pid is None or not isinstance(username, str) or not username:
        return False
    with store_guard("is_member"):
        member = db.session.scalar(
            select(UserProject.user_id)
            .join(User, User.id == UserProject.user_id)
            .where(UserProject.project_id == pid, User.username == username)
            .limit(1)
        )
    return member is not None


def create_project(name, description, owner_user_id) -> int:
    owner_id = parse_identifier(owner_user_id)
    if owner_id is None or not users_service.user_exists(owner_id):
        logger.error("No user to create project", owner_user_id=owner_user_id)
        raise ServiceError(ErrorKind.OWNER_REQUIRED, "The project is not associated with a user")

    _check_project_fields(name, description)

    with store_guard("create_project"):
        project = Project(name=name.strip(), description=description)
        db.session.add(project)
        db.session.flush()
        db.session.add(UserProject(project_id=project.id, user_id=owner_id))
        db.session.commit()

    logger.info("Project created", project_id=project.id, name=project.name, owner_user_id=owner_id)
    return project.id


def _exists(column, *criteria):
    return select(column).where(*criteria).correlate(None).exists()


def _insert_association(table, project_id, key_column, key_value, target_exists, operation):
    """Inserts (project_id, key_value) if both endpoints exist; returns the inserted row count."""
    already_linked = _exists(table.project_id, table.project_id == project_id, key_column == key_value)
    statement = insert(table).from_select(
        ["project_id", key_column.key],
        select(literal(project_id, Integer), literal(key_value, Integer))
        .where(_exists(Project.id, Project.id == project_id))
        .where(target_exists)
        .where(~already_linked),
    )

    with store_guard(operation):
        inserted = db.session.execute(statement).rowcount
        if inserted == 0:
            linked = db.session.execute(select(already_linked)).scalar()
            db.session.rollback()
            if not linked:
                raise ServiceError(ErrorKind.INTEGRITY, "Both the project and the referenced record must exist")
            return 0
        db.session.commit()
    return inserted


def add_part_to_project(project_id, part_number) -> bool:
    pid = _require_project_id(project_id)
    number = _require_part_number(part_number)

    try:
        inserted = _insert_association(
            PartProject, pid, PartProject.part_number, number,
            _exists(CarPart.part_number, CarPart.part_number == number),
            "add_part_to_project",
        )
    except ServiceError as e:
        if e.kind is ErrorKind.INTEGRITY:
            logger.warning("Part not added to project", project_id=pid, part_number=number)
        raise

    logger.info("Part added to project", project_id=pid, part_number=number, new=bool(inserted))
    return bool(inserted)


def add_user_to_project(project_id, user_id) -> bool:
    pid = _require_project_id(project_id)
    uid = parse_identifier(user_id)
    if uid is None:
        raise ServiceError(ErrorKind.VALIDATION, f"Invalid user id {user_id!r}")

    inserted = _insert_association(
        UserProject, pid, UserProject.user_id, uid,
        _exists(User.id, User.id == uid),
        "add_user_to_project",
    )

    logger.info("User added to project", project_id=pid, user_id=uid, new=bool(inserted))
    return bool(inserted)


def list_projects_for_user(username) -> List[dict]:
    if not isinstance(username, str) or not username:
        return []
    with store_guard("list_projects_for_user"):
        projects = db.session.scalars(
            select(Project)
            .join(UserProject, UserProject.project_id == Project.id)
            .join(User, User.id == UserProject.user_id)
            .where(User.username == username)
            .order_by(Project.id)
        ).all()
    return [project.to_dict() for project in projects]


def get_project(project_id) -> Optional[dict]:
    pid = _require_project_id(project_id)
    with store_guard("get_project"):
        project = db.session.get(Project, pid)
    return project.to_dict() if project is not None else None


def list_parts_in_project(project_id) -> List[dict]:
    pid = _require_project_id(project_id)
    with store_guard("list_parts_in_project"):
        part_numbers = db.session.scalars(
            select(PartProject.part_number)
            .where(PartProject.project_id == pid)
            .order_by(PartProject.part_number)
        ).all()

    parts = []
    for number in part_numbers:
        found = parts_service.find_part(number)
        if not found:
            logger.error("Dangling part reference", project_id=pid, part_number=number)
            raise ServiceError(ErrorKind.INTEGRITY, f"Project {pid} references missing part #{number}")
        parts.extend(found)
    return parts


def update_project(name, description, project_id) -> dict:
    pid = _require_project_id(project_id)
    _check_project_fields(name, description)

    with store_guard("update_project"):
        project = db.session.get(Project, pid)
        if project is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Project {pid} does not exist")

        project.name = name.strip()
        project.description = description
        db.session.commit()

    logger.info("Project updated", project_id=pid, name=project.name)
    return project.to_dict()


def delete_project(project_id) -> None:
    pid = _require_project_id(project_id)

    with store_guard("delete_project"):
        project = db.session.get(Project, pid)
        if project is None:
            raise ServiceError(ErrorKind.NOT_FOUND, f"Project {pid} does not exist")

        # Association rows first, then the project itself
        PartProject.query.filter_by(project_id=pid).delete(synchronize_session=False)
        db.session.flush()
        UserProject.query.filter_by(project_id=pid).delete(synchronize_session=False)
        db.session.flush()
        db.session.delete(project)
        db.session.commit()

    logger.info("Project deleted", project_id=pid)


def delete_part_from_project(project_id, part_number) -> None:
    pid = _require_project_id(project_id)
    number = _require_part_number(part_number)

    with store_guard("delete_part_from_project"):
        removed = PartProject.query.filter_by(project_id=pid, part_number=number).delete(
            synchronize_session=False
        )
        db.session.commit()

    logger.info("Part removed from project", project_id=pid, part_number=number, removed=removed)
