"""
Flask application factory for the Flat Rental Dashboard.
"""
from flask import Flask
from datetime import datetime
import logging

from config import config

# Configure logging
logging.basicConfig(
    level=getattr(logging, config.log_level.upper(), logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Silence per-request connection chatter from requests
logging.getLogger("urllib3").setLevel(logging.WARNING)


def create_app(resolver=None):
    """
    Application factory pattern.

    Args:
        resolver: Optional FallbackResolver; defaults to one backed by the
            configured Supabase project (or demo data when unconfigured)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)

    app.config['SECRET_KEY'] = config.secret_key
    app.config['TEMPLATES_AUTO_RELOAD'] = True
    app.config['APP_NAME'] = config.app_name

    if resolver is None:
        from storage.service import SupabaseDataSource
        from storage.resolver import FallbackResolver
        resolver = FallbackResolver(SupabaseDataSource(config.data_source), config.payments)

    app.extensions['resolver'] = resolver

    mode = 'live' if resolver.source.is_configured() else 'demo'
    app.logger.info(f"[APP] Data source mode at startup: {mode}")

    # Register blueprints
    from web.views import bp as main_bp
    from web.api import bp as api_bp
    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)

    @app.template_filter('currency')
    def currency(value):
        """Format an amount as currency, '-' when missing."""
        if value is None:
            return '-'
        try:
            return f"{config.currency_symbol}{float(value):,.2f}"
        except (TypeError, ValueError):
            return '-'

    @app.template_filter('safe_date')
    def safe_date(value, format_string='%b %d, %Y'):
        """Format an ISO date/instant string, handling None and bad values."""
        if not value:
            return '-'
        try:
            text = value[:-1] + '+00:00' if value.endswith('Z') else value
            return datetime.fromisoformat(text).strftime(format_string)
        except (AttributeError, TypeError, ValueError):
            return '-'

    @app.context_processor
    def inject_app_name():
        return {'app_name': config.app_name}

    return app


if __name__ == '__main__':
    app = create_app()
    app.run(debug=True)
