# vault_indexer/core/config.py

import os
from pathlib import Path
from typing import Dict, List, Optional, Union

import msgspec
import yaml
from dotenv import load_dotenv
from msgspec import Struct

from ..types.new import EvmAddress, to_address
from ..types.errors import ConfigurationError
from ..types.configs import DatabaseConfig, LoggingConfig, PricingConfig, TokenConfig, PoolConfig
from .logging import IndexerLogger, log_with_context, INFO

DEFAULT_VAULT_ID = '2'


class IndexerConfig(Struct):
    database: DatabaseConfig
    pricing: PricingConfig
    vault_id: str = DEFAULT_VAULT_ID
    logging: LoggingConfig = msgspec.field(default_factory=LoggingConfig)
    tokens: List[TokenConfig] = msgspec.field(default_factory=list)
    pools: List[PoolConfig] = msgspec.field(default_factory=list)

    def __post_init__(self):
        # addresses are compared as lower-case hex everywhere
        self.pricing.pricing_assets = [to_address(a) for a in self.pricing.pricing_assets]
        self.pricing.usd_stable_assets = [to_address(a) for a in self.pricing.usd_stable_assets]
        self.pricing.usd_anchors = [to_address(a) for a in self.pricing.usd_anchors]
        for token in self.tokens:
            token.address = to_address(token.address)
        for pool in self.pools:
            pool.address = to_address(pool.address)
            pool.tokens = [to_address(t) for t in pool.tokens]

    def validate(self) -> None:
        try:
            self.pricing.validate()
            for token in self.tokens:
                token.validate()
        except ValueError as e:
            raise ConfigurationError(str(e)) from e

        for pool in self.pools:
            if pool.weights is not None and len(pool.weights) != len(pool.tokens):
                raise ConfigurationError(
                    "Pool weights must align with pool tokens",
                    {'pool_id': pool.pool_id},
                )

    @property
    def token_map(self) -> Dict[EvmAddress, TokenConfig]:
        return {token.address: token for token in self.tokens}

    @classmethod
    def from_dict(cls, data: dict, env_vars: Optional[dict] = None) -> 'IndexerConfig':
        env = os.environ if env_vars is None else env_vars
        data = dict(data)

        db_url = env.get('VAULT_INDEXER_DB_URL')
        if db_url:
            data['database'] = {**data.get('database', {}), 'url': db_url}

        log_level = env.get('VAULT_INDEXER_LOG_LEVEL')
        if log_level:
            data['logging'] = {**data.get('logging', {}), 'log_level': log_level}

        try:
            config = msgspec.convert(data, type=cls)
        except msgspec.ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        config.validate()
        return config

    @classmethod
    def from_file(cls, config_path: Union[str, Path], env_vars: Optional[dict] = None) -> 'IndexerConfig':
        logger = IndexerLogger.get_logger('core.config')
        load_dotenv()

        path = Path(config_path)
        if not path.exists():
            raise ConfigurationError(f"Config file not found: {path}")

        with open(path, 'r') as f:
            data = yaml.safe_load(f) or {}

        config = cls.from_dict(data, env_vars=env_vars)

        log_with_context(logger, INFO, "Configuration loaded",
                         config_path=str(path),
                         vault_id=config.vault_id,
                         pricing_asset_count=len(config.pricing.pricing_assets),
                         token_count=len(config.tokens),
                         pool_count=len(config.pools))
        return config
