import pytest

from zeroex_swap.client import ZEROEX_BASE_URL
from zeroex_swap.config import ConfigurationError, load_settings

ENV = {
    "PRIVATE_KEY": "4c0883a69102937d6231471b5dbb6204fe5129617082792ae468d01a3f362318",
    "ZERO_EX_API_KEY": "api-key",
    "ALCHEMY_HTTP_TRANSPORT_URL": "https://scroll-mainnet.g.alchemy.com/v2/key",
}


@pytest.fixture
def env(monkeypatch):
    monkeypatch.delenv("ZERO_EX_BASE_URL", raising=False)
    for name, value in ENV.items():
        monkeypatch.setenv(name, value)
    return monkeypatch


def test_loads_all_settings(env):
    settings = load_settings(use_dotenv=False)

    assert settings.private_key == "0x" + ENV["PRIVATE_KEY"]
    assert settings.zero_ex_api_key == "api-key"
    assert settings.rpc_url == ENV["ALCHEMY_HTTP_TRANSPORT_URL"]
    assert settings.zero_ex_base_url == ZEROEX_BASE_URL


def test_prefixed_private_key_is_kept(env):
    env.setenv("PRIVATE_KEY", "0x" + ENV["PRIVATE_KEY"])

    assert load_settings(use_dotenv=False).private_key == "0x" + ENV["PRIVATE_KEY"]


def test_base_url_override(env):
    env.setenv("ZERO_EX_BASE_URL", "https://scroll.api.0x.test")

    assert load_settings(use_dotenv=False).zero_ex_base_url == "https://scroll.api.0x.test"


@pytest.mark.parametrize("missing", list(ENV))
def test_missing_setting_is_fatal(env, missing):
    env.delenv(missing)

    with pytest.raises(ConfigurationError, match=f"missing {missing}."):
        load_settings(use_dotenv=False)
