"""
Flask views for the Flat Rental Dashboard.
"""
from concurrent.futures import ThreadPoolExecutor
from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
import logging

from config import config
from rental_engine import occupancy_rate, payment_status_counts, PaymentFilter
from rental_engine.exceptions import ConnectivityError, PaymentNotFoundError, ValidationError
from rental_engine.filters import STATUS_FILTER_VALUES

logger = logging.getLogger(__name__)
bp = Blueprint('main', __name__)

FLAT_STATUS_COLORS = {
    'occupied': 'success',
    'vacant': 'secondary',
    'maintenance': 'warning',
}

LEASE_STATUS_COLORS = {
    'active': 'success',
    'expired': 'warning',
    'terminated': 'danger',
}

PAYMENT_STATUS_COLORS = {
    'paid': 'success',
    'pending': 'warning',
    'overdue': 'danger',
}


def get_resolver():
    """Resolver registered by the application factory."""
    return current_app.extensions['resolver']


def status_color(status: str, palette: dict) -> str:
    return palette.get(status, 'light')


@bp.route('/')
def dashboard():
    """Dashboard - stats cards and flat grid."""
    resolver = get_resolver()

    # Two independent reads, joined before rendering
    with ThreadPoolExecutor(max_workers=2) as pool:
        stats_future = pool.submit(resolver.fetch_dashboard_stats)
        flats_future = pool.submit(resolver.fetch_flats)
        stats_result = stats_future.result()
        flats_result = flats_future.result()

    stats = stats_result.data
    return render_template(
        'dashboard.html',
        stats=stats,
        occupancy=occupancy_rate(stats),
        flats=flats_result.data,
        demo_mode=stats_result.is_demo or flats_result.is_demo,
        flat_colors=FLAT_STATUS_COLORS
    )


@bp.route('/flats')
def flats():
    result = get_resolver().fetch_flats()
    return render_template(
        'flats.html',
        flats=result.data,
        demo_mode=result.is_demo,
        flat_colors=FLAT_STATUS_COLORS
    )


@bp.route('/tenants')
def tenants():
    result = get_resolver().fetch_tenants()
    return render_template('tenants.html', tenants=result.data, demo_mode=result.is_demo)


@bp.route('/leases')
def leases():
    result = get_resolver().fetch_leases()
    return render_template(
        'leases.html',
        leases=result.data,
        demo_mode=result.is_demo,
        lease_colors=LEASE_STATUS_COLORS
    )


@bp.route('/payments')
def payments():
    """Payments list with status filter and tenant/flat search."""
    result = get_resolver().fetch_payments()
    all_payments = result.data

    payment_filter = PaymentFilter.from_args(request.args)
    filtered = payment_filter.apply(all_payments)

    return render_template(
        'payments.html',
        payments=filtered,
        total_count=len(all_payments),
        counts=payment_status_counts(all_payments),
        payment_filter=payment_filter,
        status_options=STATUS_FILTER_VALUES,
        demo_mode=result.is_demo,
        payment_colors=PAYMENT_STATUS_COLORS
    )


@bp.route('/payments/<payment_id>/status', methods=['POST'])
def update_payment_status(payment_id: str):
    """Form handler for the mark paid / pending / overdue buttons."""
    status = request.form.get('status', '')
    # Preserve the list filters across the redirect
    back = url_for('main.payments', status=request.form.get('filter_status') or None,
                   q=request.form.get('filter_q') or None)

    try:
        result = get_resolver().update_payment_status(payment_id, status)
    except ValidationError as e:
        flash(f'Invalid update: {e}', 'danger')
        return redirect(back)
    except PaymentNotFoundError as e:
        flash(str(e), 'warning')
        return redirect(back)
    except ConnectivityError as e:
        logger.error(f"[VIEWS] Error updating payment {payment_id}: {e}", exc_info=True)
        flash('Failed to update payment. Please try again.', 'danger')
        return redirect(back)

    if result.is_demo:
        flash(f'Payment marked {status} (demo mode, changes are not saved)', 'info')
    else:
        flash(f'Payment marked {status}', 'success')
    return redirect(back)


@bp.route('/settings')
def settings():
    """Connection status and data source details."""
    result = get_resolver().check_connection()
    return render_template(
        'settings.html',
        connected=bool(result.data),
        demo_mode=result.is_demo,
        reason=result.reason.value if result.is_demo else None,
        endpoint=config.data_source.masked_url()
    )


@bp.route('/settings/test-connection', methods=['POST'])
def test_connection():
    result = get_resolver().check_connection()
    if result.is_demo:
        flash('Not connected - showing demo data.', 'warning')
    else:
        flash('Connected to the database.', 'success')
    return redirect(url_for('main.settings'))


@bp.app_context_processor
def inject_helpers():
    return {'status_color': status_color}
