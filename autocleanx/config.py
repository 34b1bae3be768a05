# autocleanx/config.py
import os
import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, asdict

logger = logging.getLogger(__name__)

@dataclass
class PathConfig:
    """Configuration for project paths"""
    PROJECT_ROOT: Path
    OUTPUT_DIR: Path
    LOGS_DIR: Path

@dataclass
class IngestionConfig:
    """Configuration for reading delimited input files"""
    MAX_FILE_SIZE_MB: int
    SUPPORTED_FILE_FORMATS: List[str]
    ENCODINGS: List[str]
    SEPARATORS: List[str]

@dataclass
class InferenceConfig:
    """Thresholds used by column type inference"""
    CATEGORICAL_MAX_UNIQUE_RATIO: float  # distinct/non-missing must be strictly below
    CATEGORICAL_MIN_VALUES: int  # non-missing count must be strictly above

@dataclass
class ApiConfig:
    """Configuration for the HTTP API"""
    DEFAULT_HOST: str
    DEFAULT_PORT: int
    ENABLE_CORS: bool
    MAX_UPLOAD_SIZE_MB: int

class Config:
    """Central configuration manager for the analysis pipeline"""

    def __init__(self, config_file: Optional[str] = None):
        """
        Initialize configuration

        Args:
            config_file: Optional path to JSON config file to override defaults
        """
        self._load_default_config()

        if config_file and os.path.exists(config_file):
            self._load_config_file(config_file)

        self._load_environment_variables()

    def _load_default_config(self):
        """Load default configuration values"""
        project_root = Path(__file__).parent.parent
        self.paths = PathConfig(
            PROJECT_ROOT=project_root,
            OUTPUT_DIR=project_root / "output",
            LOGS_DIR=project_root / "logs"
        )

        self.ingestion = IngestionConfig(
            MAX_FILE_SIZE_MB=100,
            SUPPORTED_FILE_FORMATS=['.csv', '.tsv', '.txt'],
            ENCODINGS=['utf-8', 'latin-1', 'cp1252'],
            SEPARATORS=[',', ';', '\t', '|']
        )

        self.inference = InferenceConfig(
            CATEGORICAL_MAX_UNIQUE_RATIO=0.5,
            CATEGORICAL_MIN_VALUES=10
        )

        self.api = ApiConfig(
            DEFAULT_HOST="0.0.0.0",
            DEFAULT_PORT=8000,
            ENABLE_CORS=True,
            MAX_UPLOAD_SIZE_MB=25
        )

        self.logging_level = "INFO"

    def _load_config_file(self, config_file: str):
        """Load configuration from JSON file"""
        try:
            with open(config_file, 'r') as f:
                config_data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Could not load config file {config_file}: {e}")
            return

        for section, values in config_data.items():
            if not hasattr(self, section):
                continue
            if isinstance(values, dict):
                config_obj = getattr(self, section)
                for key, value in values.items():
                    if hasattr(config_obj, key):
                        if isinstance(getattr(config_obj, key), Path):
                            value = Path(value)
                        setattr(config_obj, key, value)
            else:
                setattr(self, section, values)

    def _load_environment_variables(self):
        """Load configuration from environment variables"""

        # Paths
        if os.getenv("AUTOCLEANX_OUTPUT_DIR"):
            self.paths.OUTPUT_DIR = Path(os.getenv("AUTOCLEANX_OUTPUT_DIR"))

        # Ingestion
        if os.getenv("MAX_FILE_SIZE_MB"):
            self.ingestion.MAX_FILE_SIZE_MB = int(os.getenv("MAX_FILE_SIZE_MB"))

        # Inference thresholds
        if os.getenv("CATEGORICAL_MAX_UNIQUE_RATIO"):
            self.inference.CATEGORICAL_MAX_UNIQUE_RATIO = float(os.getenv("CATEGORICAL_MAX_UNIQUE_RATIO"))

        if os.getenv("CATEGORICAL_MIN_VALUES"):
            self.inference.CATEGORICAL_MIN_VALUES = int(os.getenv("CATEGORICAL_MIN_VALUES"))

        # API settings
        if os.getenv("API_HOST"):
            self.api.DEFAULT_HOST = os.getenv("API_HOST")

        if os.getenv("API_PORT"):
            self.api.DEFAULT_PORT = int(os.getenv("API_PORT"))

        # General settings
        if os.getenv("LOG_LEVEL"):
            self.logging_level = os.getenv("LOG_LEVEL")

    def create_directories(self):
        """Create output and log directories if they don't exist"""
        for directory in [self.paths.OUTPUT_DIR, self.paths.LOGS_DIR]:
            directory.mkdir(parents=True, exist_ok=True)

    def to_dict(self) -> Dict[str, Any]:
        """Convert all sections to plain dictionaries"""
        config_dict = {}
        for section in ['paths', 'ingestion', 'inference', 'api']:
            config_dict[section] = {
                key: str(value) if isinstance(value, Path) else value
                for key, value in asdict(getattr(self, section)).items()
            }
        config_dict['logging_level'] = self.logging_level
        return config_dict

    def save_config(self, config_file: str):
        """Save current configuration to JSON file"""
        with open(config_file, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    def validate_config(self) -> List[str]:
        """Validate configuration and return list of issues"""
        issues = []

        if self.ingestion.MAX_FILE_SIZE_MB <= 0:
            issues.append(f"Invalid max file size: {self.ingestion.MAX_FILE_SIZE_MB}")

        if not self.ingestion.ENCODINGS:
            issues.append("At least one encoding must be configured")

        if not self.ingestion.SEPARATORS:
            issues.append("At least one separator must be configured")

        ratio = self.inference.CATEGORICAL_MAX_UNIQUE_RATIO
        if ratio <= 0 or ratio > 1:
            issues.append(f"Invalid categorical unique ratio: {ratio}")

        if self.inference.CATEGORICAL_MIN_VALUES < 0:
            issues.append(f"Invalid categorical minimum count: {self.inference.CATEGORICAL_MIN_VALUES}")

        if not 0 < self.api.DEFAULT_PORT < 65536:
            issues.append(f"Invalid API port: {self.api.DEFAULT_PORT}")

        return issues

# Global configuration instance
_config = None

def get_config(config_file: Optional[str] = None) -> Config:
    """Get global configuration instance (singleton pattern)"""
    global _config
    if _config is None:
        _config = Config(config_file)
    return _config

def reload_config(config_file: Optional[str] = None) -> Config:
    """Reload configuration (useful for testing)"""
    global _config
    _config = Config(config_file)
    return _config
