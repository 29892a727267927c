from flask import Blueprint, jsonify

from partstracker.auth import current_identity, login_required, project_member_required
from partstracker.errors import ErrorKind, ServiceError
from partstracker.i18n import build_view, get_language
from partstracker.routes.main import request_data
from partstracker.services import projects as projects_service
from partstracker.services import users as users_service

projects_bp = Blueprint('projects', __name__)


@projects_bp.route("/projects", methods=["GET"])
@login_required
def show_projects():
    projects = projects_service.list_projects_for_user(current_identity().username)
    return jsonify(build_view(get_language(), projects, 'projects_listed'))


@projects_bp.route("/projects", methods=["POST"])
@login_required
def create_project():
    data = request_data()
    owner_id = users_service.get_user_id(current_identity().username)
    project_id = projects_service.create_project(data.get("name"), data.get("description"), owner_id)
    project = projects_service.get_project(project_id)
    return jsonify(build_view(get_language(), project, 'project_created')), 201


@projects_bp.route("/projects/<project_id>", methods=["GET"])
@project_member_required
def get_project(project_id):
    lang = get_language()
    project = projects_service.get_project(project_id)
    if project is None:
        return jsonify(build_view(lang, message_key='project_not_found', project_id=project_id)), 404
    return jsonify(build_view(lang, project))


@projects_bp.route("/projects/<project_id>", methods=["PUT"])
@project_member_required
def update_project(project_id):
    data = request_data()
    project = projects_service.update_project(data.get("name"), data.get("description"), project_id)
    return jsonify(build_view(get_language(), project, 'project_updated', project_id=project['project_id']))


@projects_bp.route("/projects/<project_id>", methods=["DELETE"])
@project_member_required
def delete_project(project_id):
    projects_service.delete_project(project_id)
    return jsonify(build_view(get_language(), message_key='project_deleted', project_id=project_id)), 202


@projects_bp.route("/projects/<project_id>/parts", methods=["GET"])
@project_member_required
def list_project_parts(project_id):
    parts = projects_service.list_parts_in_project(project_id)
    return jsonify(build_view(get_language(), parts))


@projects_bp.route("/projects/<project_id>/parts", methods=["POST"])
@project_member_required
def add_part_to_project(project_id):
    part_number = request_data().get("partNumber")
    projects_service.add_part_to_project(project_id, part_number)
    return jsonify(build_view(
        get_language(), message_key='project_part_added', project_id=project_id, part_number=part_number
    )), 201


@projects_bp.route("/projects/<project_id>/parts/<part_number>", methods=["DELETE"])
@project_member_required
def remove_part_from_project(project_id, part_number):
    projects_service.delete_part_from_project(project_id, part_number)
    return jsonify(build_view(
        get_language(), message_key='project_part_removed', project_id=project_id, part_number=part_number
    ))


@projects_bp.route("/projects/<project_id>/users", methods=["POST"])
@project_member_required
def add_user_to_project(project_id):
    username = request_data().get("username")
    user_id = users_service.get_user_id(username)
    if user_id is None:
        raise ServiceError(ErrorKind.INTEGRITY, f"User '{username}' does not exist")

    projects_service.add_user_to_project(project_id, user_id)
    return jsonify(build_view(
        get_language(), message_key='project_user_added', project_id=project_id, username=username
    )), 201
