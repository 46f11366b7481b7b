# ============================================================================
# carwash/services/staff/staff_config_provider.py
# ============================================================================
"""Access to the singleton staff configuration row"""
import logging
from abc import ABC, abstractmethod

from sqlalchemy.orm import Session

from carwash.models.staff_config import StaffConfig, DEFAULT_STAFF_CONFIG

logger = logging.getLogger(__name__)


class StaffConfigProvider(ABC):
    """Injected into the slot engine and booking admission instead of a module global"""

    @abstractmethod
    def get(self) -> StaffConfig:
        ...

    @abstractmethod
    def update(self, **fields) -> StaffConfig:
        ...


class DatabaseStaffConfigProvider(StaffConfigProvider):
    """Reads and writes the one-row staff_config table"""

    def __init__(self, db: Session):
        self.db = db

    def get(self) -> StaffConfig:
        """Return the config, creating it with defaults on first read"""
        config = self.db.query(StaffConfig).first()
        if config is None:
            config = StaffConfig(**DEFAULT_STAFF_CONFIG)
            self.db.add(config)
            self.db.commit()
            self.db.refresh(config)
            logger.info("Created default staff configuration")
        return config

    def update(self, **fields) -> StaffConfig:
        """
        Merge the supplied fields into the stored config.

        Fields passed as None are treated as not supplied and keep their
        stored value; they are never reset to defaults.
        """
        unknown = set(fields) - set(DEFAULT_STAFF_CONFIG)
        if unknown:
            raise TypeError(f"Unknown staff config fields: {sorted(unknown)}")

        values = {key: value for key, value in fields.items() if value is not None}

        config = self.db.query(StaffConfig).first()
        if config is None:
            config = StaffConfig(**{**DEFAULT_STAFF_CONFIG, **values})
            self.db.add(config)
        else:
            for key, value in values.items():
                setattr(config, key, value)

        self.db.commit()
        self.db.refresh(config)
        logger.info(f"Staff configuration updated: {values}")
        return config
