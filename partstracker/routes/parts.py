from flask import Blueprint, jsonify

from partstracker.auth import admin_required
from partstracker.i18n import build_view, get_language
from partstracker.routes.main import request_data
from partstracker.services import parts as parts_service

parts_bp = Blueprint('parts', __name__)


@parts_bp.route("/parts", methods=["GET"])
def all_parts():
    return jsonify(build_view(get_language(), parts_service.list_parts(), 'parts_listed'))


@parts_bp.route("/parts", methods=["POST"])
@admin_required
def add_part():
    data = request_data()
    part = parts_service.create_part(
        data.get("partNumber"),
        data.get("name"),
        data.get("condition"),
        data.get("image"),
    )
    return jsonify(build_view(get_language(), part, 'part_created', **part)), 201


@parts_bp.route("/parts/<part_number>", methods=["GET"])
def get_one_part(part_number):
    lang = get_language()
    found = parts_service.find_part(part_number)
    if not found:
        return jsonify(build_view(lang, [], 'part_not_found', part_number=part_number)), 404
    return jsonify(build_view(lang, found, 'part_found', part_number=found[0]['part_number']))


@parts_bp.route("/parts/<part_number>", methods=["PUT"])
@admin_required
def update_part(part_number):
    part = parts_service.update_part_name(part_number, request_data().get("name"))
    return jsonify(build_view(get_language(), part, 'part_updated', **part))


@parts_bp.route("/parts/<part_number>", methods=["DELETE"])
@admin_required
def delete_one_part(part_number):
    deleted = parts_service.delete_part(part_number)
    return jsonify(build_view(get_language(), deleted, 'part_deleted', **deleted)), 202
