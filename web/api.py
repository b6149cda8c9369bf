"""
JSON API for the Flat Rental Dashboard.

Every read responds successfully, possibly with demo data; the
``X-Data-Mode`` header tells clients which one they got.
"""
from flask import Blueprint, jsonify, request, current_app
import logging

from rental_engine import views_to_dicts
from rental_engine.exceptions import ConnectivityError, PaymentNotFoundError, ValidationError
from rental_engine.filters import filter_payments, STATUS_FILTER_ALL

logger = logging.getLogger(__name__)
bp = Blueprint('api', __name__, url_prefix='/api')


def _resolver():
    return current_app.extensions['resolver']


def _respond(result, payload):
    response = jsonify(payload)
    response.headers['X-Data-Mode'] = 'demo' if result.is_demo else 'live'
    return response


@bp.route('/dashboard-stats')
def dashboard_stats():
    result = _resolver().fetch_dashboard_stats()
    return _respond(result, result.data.to_dict())


@bp.route('/flats')
def flats():
    result = _resolver().fetch_flats()
    return _respond(result, views_to_dicts(result.data))


@bp.route('/payments')
def payments():
    """Payments with lease context; optional ``status`` and ``q`` filters."""
    status_filter = (request.args.get('status') or STATUS_FILTER_ALL).strip().lower()
    search_term = (request.args.get('q') or '').strip()

    result = _resolver().fetch_payments()
    try:
        filtered = filter_payments(result.data, status_filter, search_term)
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400

    return _respond(result, views_to_dicts(filtered))


@bp.route('/payments/<payment_id>', methods=['PATCH'])
def update_payment(payment_id: str):
    """Set a payment's status; body ``{"status": ..., "payment_date": ...}``."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return jsonify({'error': 'Request body must be a JSON object'}), 400

    try:
        result = _resolver().update_payment_status(
            payment_id,
            body.get('status'),
            body.get('payment_date')
        )
    except ValidationError as e:
        return jsonify({'error': str(e)}), 400
    except PaymentNotFoundError as e:
        return jsonify({'error': str(e)}), 404
    except ConnectivityError as e:
        logger.error(f"[API] Error updating payment {payment_id}: {e}", exc_info=True)
        return jsonify({'error': 'Failed to update payment'}), 500

    return _respond(result, result.data.to_dict())


@bp.route('/leases')
def leases():
    result = _resolver().fetch_leases()
    return _respond(result, views_to_dicts(result.data))


@bp.route('/tenants')
def tenants():
    result = _resolver().fetch_tenants()
    return _respond(result, views_to_dicts(result.data))


@bp.route('/health')
def health():
    result = _resolver().check_connection()
    payload = {
        'connected': bool(result.data),
        'mode': 'demo' if result.is_demo else 'live',
    }
    if result.is_demo:
        payload['reason'] = result.reason.value
    return _respond(result, payload)
