"""
Configuration management for Buyside
"""

import os
import logging
from pathlib import Path
from typing import List
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: str = 'false') -> bool:
    return os.getenv(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Application configuration"""

    # Supabase
    SUPABASE_URL: str = os.getenv('SUPABASE_URL', '')
    SUPABASE_KEY: str = os.getenv('SUPABASE_ANON_KEY', '') or os.getenv('SUPABASE_SERVICE_KEY', '')
    CAMPAIGNS_TABLE: str = os.getenv('CAMPAIGNS_TABLE', 'campaigns')
    CAMPAIGN_ASSETS_BUCKET: str = os.getenv('CAMPAIGN_ASSETS_BUCKET', 'campaign-assets')
    SUPABASE_TIMEOUT_SECONDS: int = int(os.getenv('SUPABASE_TIMEOUT_SECONDS', '30'))

    # Gemini
    GEMINI_API_KEY: str = os.getenv('GEMINI_API_KEY', '') or os.getenv('API_KEY', '')
    GEMINI_MODEL: str = os.getenv('GEMINI_MODEL', 'gemini-2.5-flash')

    # Campaign creation pipeline
    ENRICHMENT_TIMEOUT_SECONDS: float = float(os.getenv('ENRICHMENT_TIMEOUT_SECONDS', '60'))
    PARALLEL_ENRICHMENT: bool = _env_flag('PARALLEL_ENRICHMENT')

    # Local campaign cache
    CACHE_DIR: Path = Path(os.getenv('BUYSIDE_CACHE_DIR', str(Path.home() / '.buyside')))
    CACHE_KEY: str = os.getenv('BUYSIDE_CACHE_KEY', 'buyside_campaigns')

    @classmethod
    def validate(cls) -> List[str]:
        """
        Check required configuration.

        Missing values are tolerated at startup: each one is logged as a
        warning and the remote calls that need it fail at first use.

        Returns:
            Names of the missing settings (empty when fully configured)
        """
        required = {
            'SUPABASE_URL': cls.SUPABASE_URL,
            'SUPABASE_ANON_KEY': cls.SUPABASE_KEY,
            'GEMINI_API_KEY': cls.GEMINI_API_KEY,
        }

        missing = [k for k, v in required.items() if not v]

        for name in missing:
            logger.warning(f"{name} is not set. Features that depend on it will fail until configured.")

        return missing
