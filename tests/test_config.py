# tests/test_config.py

import copy
from pathlib import Path

import pytest
import yaml

from vault_indexer.core.config import IndexerConfig
from vault_indexer.types.errors import ConfigurationError

from .factories import CONFIG_DATA, DAI, USDC, WETH

MAINNET_CONFIG = Path(__file__).parent.parent / "config" / "mainnet.yaml"


def test_from_dict(indexer_config):
    assert indexer_config.vault_id == '2'
    assert indexer_config.database.url == 'sqlite:///:memory:'
    assert indexer_config.pricing.usd_anchors == [USDC, DAI]
    assert indexer_config.token_map[WETH].symbol == 'WETH'
    assert len(indexer_config.pools) == 5


def test_addresses_lower_cased():
    data = copy.deepcopy(CONFIG_DATA)
    data['pricing']['pricing_assets'] = [WETH.upper().replace('0X', '0x')]
    data['tokens'][0]['address'] = WETH.upper().replace('0X', '0x')

    config = IndexerConfig.from_dict(data, env_vars={})

    assert config.pricing.pricing_assets == [WETH]
    assert WETH in config.token_map


def test_env_overrides():
    config = IndexerConfig.from_dict(CONFIG_DATA, env_vars={
        'VAULT_INDEXER_DB_URL': 'sqlite:///override.db',
        'VAULT_INDEXER_LOG_LEVEL': 'WARNING',
    })

    assert config.database.url == 'sqlite:///override.db'
    assert config.logging.log_level == 'WARNING'


def test_anchor_must_be_stable():
    data = copy.deepcopy(CONFIG_DATA)
    data['pricing']['usd_anchors'] = [WETH]

    with pytest.raises(ConfigurationError):
        IndexerConfig.from_dict(data, env_vars={})


def test_anchor_required():
    data = copy.deepcopy(CONFIG_DATA)
    data['pricing']['usd_anchors'] = []

    with pytest.raises(ConfigurationError):
        IndexerConfig.from_dict(data, env_vars={})


def test_invalid_structure():
    data = copy.deepcopy(CONFIG_DATA)
    del data['pricing']

    with pytest.raises(ConfigurationError):
        IndexerConfig.from_dict(data, env_vars={})


def test_pool_weights_must_align():
    data = copy.deepcopy(CONFIG_DATA)
    data['pools'][0]['weights'] = ['1']

    with pytest.raises(ConfigurationError):
        IndexerConfig.from_dict(data, env_vars={})


def test_from_file(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(yaml.safe_dump(CONFIG_DATA))

    config = IndexerConfig.from_file(path, env_vars={})

    assert config.pricing.pricing_assets == [WETH, USDC, DAI]


def test_missing_file(tmp_path):
    with pytest.raises(ConfigurationError):
        IndexerConfig.from_file(tmp_path / "absent.yaml", env_vars={})


def test_shipped_mainnet_config_loads():
    config = IndexerConfig.from_file(MAINNET_CONFIG, env_vars={})

    assert config.vault_id == '2'
    assert set(config.pricing.usd_anchors) <= set(config.pricing.usd_stable_assets)
    assert config.token_map["0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48"].decimals == 6
