"""Liveness probe."""
from flask import Blueprint, jsonify

from zakat.context import get_rate_store

health_bp = Blueprint('health', __name__)


@health_bp.route('/healthz')
def healthz():
    """Report liveness and whether the rate table needs a refresh."""
    rate_store = get_rate_store()
    return jsonify({
        'status': 'ok',
        'rates_source': rate_store.source,
        'rates_stale': rate_store.is_stale(),
    })
