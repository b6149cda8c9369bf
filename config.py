"""
Centralized configuration for the Flat Rental Dashboard.
All environment lookups and data source rules are defined here.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple
import os


PLACEHOLDER_URL = "https://placeholder.supabase.co"
PLACEHOLDER_KEY = "placeholder-key"


def _first_env(*names: str) -> Optional[str]:
    """Return the first non-empty environment variable among names."""
    for name in names:
        value = os.getenv(name)
        if value:
            return value
    return None


@dataclass
class DataSourceConfig:
    """Supabase (PostgREST) connection settings."""
    url: Optional[str] = field(default_factory=lambda: _first_env(
        'SUPABASE_URL', 'NEXT_PUBLIC_SUPABASE_URL'
    ))
    key: Optional[str] = field(default_factory=lambda: _first_env(
        'SUPABASE_SERVICE_ROLE_KEY', 'SUPABASE_ANON_KEY', 'NEXT_PUBLIC_SUPABASE_ANON_KEY'
    ))
    timeout_seconds: float = field(default_factory=lambda: float(os.getenv('SUPABASE_TIMEOUT', '10')))

    # Guards against demo placeholder values being treated as a real project
    placeholder_urls: Tuple[str, ...] = (PLACEHOLDER_URL,)
    placeholder_keys: Tuple[str, ...] = (PLACEHOLDER_KEY,)
    provider_domain: str = "supabase.co"
    min_key_length: int = 20

    def is_configured(self) -> bool:
        """Check if a real Supabase project is configured."""
        if not self.url or not self.key:
            return False
        if self.url in self.placeholder_urls or self.key in self.placeholder_keys:
            return False
        if self.provider_domain not in self.url:
            return False
        return len(self.key) > self.min_key_length

    @property
    def rest_url(self) -> str:
        """Base URL of the PostgREST endpoint."""
        return f"{(self.url or PLACEHOLDER_URL).rstrip('/')}/rest/v1"

    def masked_url(self) -> str:
        """Endpoint for display on the settings page, hiding the project ref."""
        if not self.url:
            return ''
        scheme, sep, rest = self.url.partition('://')
        if not sep:
            return self.url
        host, slash, path = rest.partition('/')
        labels = host.split('.')
        if len(labels) > 2 and len(labels[0]) > 4:
            labels[0] = labels[0][:4] + '*' * (len(labels[0]) - 4)
        return f"{scheme}://{'.'.join(labels)}{slash}{path}"


@dataclass
class PaymentRules:
    """Accepted values for payment updates."""
    allowed_statuses: Tuple[str, ...] = ("pending", "paid", "overdue")
    paid_status: str = "paid"


@dataclass
class AppConfig:
    """Main application configuration container."""
    secret_key: str = field(default_factory=lambda: os.getenv('SECRET_KEY', 'dev-secret-key-change-in-production'))
    log_level: str = field(default_factory=lambda: os.getenv('LOG_LEVEL', 'INFO'))
    app_name: str = field(default_factory=lambda: os.getenv('APP_NAME', 'Flat Rental Dashboard'))
    currency_symbol: str = field(default_factory=lambda: os.getenv('CURRENCY_SYMBOL', '$'))

    data_source: DataSourceConfig = field(default_factory=DataSourceConfig)
    payments: PaymentRules = field(default_factory=PaymentRules)


# Global configuration instance
config = AppConfig()
