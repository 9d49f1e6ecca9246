"""
JSON API: deletion of brands, stores, materials, filaments and variant instances.

DELETE /api/delete
    {"type": "brand"|"store"|"material"|"filament"|"instance",
     "name": ..., "brandName": ..., "materialName": ..., "filamentName": ...}
"""

import logging

from flask import Blueprint, jsonify, request

from ..errors import InvalidKind, MissingAncestor, NotFoundOnDisk, PathEscape
from ..state import get_settings, refresh_database
from ..store.delete import delete_tree
from ..store.paths import DeleteTarget, resolve_delete_path

logger = logging.getLogger(__name__)

bp = Blueprint('api', __name__, url_prefix='/api')


@bp.delete('/delete')
def delete_entry():
    try:
        payload = request.get_json(silent=True)
        if not isinstance(payload, dict):
            return jsonify({'error': 'Invalid request body'}), 400

        target = DeleteTarget.from_payload(payload)
        settings = get_settings()
        try:
            target_path = resolve_delete_path(target, settings.data_root, settings.store_root)
        except (InvalidKind, MissingAncestor, PathEscape) as e:
            logger.warning("Rejected delete of %r: %s", target, e.message)
            return jsonify({'error': e.message}), e.status

        if not delete_tree(target_path):
            missing = NotFoundOnDisk(target.kind, target.name)
            return jsonify({'error': missing.message}), missing.status

        refresh_database()
        return jsonify({
            'success': True,
            'message': f'{target.kind} "{target.name}" deleted successfully',
        })
    except Exception:
        logger.exception("Delete error")
        return jsonify({'error': 'Internal server error'}), 500
