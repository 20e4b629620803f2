"""Provider registry loading and validation."""

from __future__ import annotations

import pytest

from inference_gateway.base.errors import CatalogConfigError, ProviderNotFoundError
from inference_gateway.base.interfaces import ProtocolAdapter, SupportsExecution, SupportsStreaming
from inference_gateway.base.models import ProtocolKind
from inference_gateway.base.registry import ProviderRegistry
from inference_gateway.gemini.adapter import GeminiAdapter
from inference_gateway.openai.adapter import OpenAICompatibleAdapter
from inference_gateway.sandbox.adapter import SandboxExecAdapter
from inference_gateway.tests.utils import catalog, provider_entry


def test_registry_preserves_declaration_order_and_builds_adapters():
    reg = ProviderRegistry.from_mapping(
        catalog(
            provider_entry("beta"),
            provider_entry("gem", "gemini", discovery_path=None, default_models=["g-1"]),
            provider_entry("box", "sandboxed-exec", discovery_path=None),
            provider_entry("alpha"),
        )
    )
    assert reg.ids() == ("beta", "gem", "box", "alpha")  # nosec B101
    assert isinstance(reg.adapter_for("beta"), OpenAICompatibleAdapter)  # nosec B101
    assert isinstance(reg.adapter_for("gem"), GeminiAdapter)  # nosec B101
    assert isinstance(reg.adapter_for("box"), SandboxExecAdapter)  # nosec B101
    assert [d.id for d in reg.streaming_descriptors()] == ["beta", "gem", "alpha"]  # nosec B101
    assert reg.lookup("box").default_models == ("sandbox-js-executor",)  # nosec B101


def test_lookup_unknown_provider_raises_not_found():
    reg = ProviderRegistry.from_mapping(catalog(provider_entry("alpha")))
    with pytest.raises(ProviderNotFoundError) as info:
        reg.lookup("nope")
    assert info.value.status_code == 404  # nosec B101
    assert "nope" not in reg  # nosec B101


def test_camel_case_keys_are_accepted():
    reg = ProviderRegistry.from_mapping(
        {
            "providers": [
                {
                    "id": "box",
                    "displayName": "Box",
                    "protocolKind": "sandboxed-exec",
                    "baseEndpoint": "https://box.test/",
                    "credentialRef": "BOX_TOKEN",
                    "credentialAliases": ["BOX_ALT"],
                    "sandboxLimits": {"timeoutMs": 500, "memoryLimit": "32MB"},
                }
            ]
        }
    )
    d = reg.lookup("box")
    assert d.protocol_kind is ProtocolKind.SANDBOXED_EXEC  # nosec B101
    assert d.base_endpoint == "https://box.test"  # nosec B101
    assert d.credential_refs() == ("BOX_TOKEN", "BOX_ALT")  # nosec B101
    assert d.sandbox_limits.timeout_ms == 500  # nosec B101


@pytest.mark.parametrize(
    "document",
    [
        catalog(provider_entry("alpha", base_endpoint=None)),
        catalog(provider_entry("gem", "gemini", base_endpoint="")),
        catalog(provider_entry("box", "sandboxed-exec", sandbox_limits=None)),
        catalog(provider_entry("alpha", "carrier-pigeon")),
        catalog(provider_entry("alpha"), provider_entry("alpha")),
        catalog(),
        {"providers": "alpha"},
        {"something_else": []},
    ],
    ids=[
        "missing-endpoint",
        "blank-endpoint",
        "sandbox-without-limits",
        "unknown-kind",
        "duplicate-id",
        "empty",
        "providers-not-a-list",
        "no-providers-key",
    ],
)
def test_malformed_catalog_fails_fast(document):
    with pytest.raises(CatalogConfigError):
        ProviderRegistry.from_mapping(document)


def test_non_mapping_document_is_rejected():
    with pytest.raises(CatalogConfigError):
        ProviderRegistry.from_mapping(["alpha"])  # type: ignore[arg-type]


def test_from_catalog_reads_yaml_file(tmp_path):
    path = tmp_path / "providers.yaml"
    path.write_text(
        "providers:\n"
        "  - id: local\n"
        "    protocol_kind: openai-compatible\n"
        "    base_endpoint: http://localhost:11434/v1\n"
        "    default_models: [llama3]\n",
        encoding="utf-8",
    )
    reg = ProviderRegistry.from_catalog(path)
    assert reg.lookup("local").display_name == "local"  # nosec B101
    assert reg.lookup("local").credential_refs() == ()  # nosec B101


def test_from_catalog_missing_or_invalid_file(tmp_path):
    with pytest.raises(CatalogConfigError):
        ProviderRegistry.from_catalog(tmp_path / "absent.yaml")
    bad = tmp_path / "bad.yaml"
    bad.write_text("providers: [unclosed\n", encoding="utf-8")
    with pytest.raises(CatalogConfigError):
        ProviderRegistry.from_catalog(bad)


def test_packaged_catalog_loads(monkeypatch):
    monkeypatch.delenv("GATEWAY_PROVIDERS_FILE", raising=False)
    reg = ProviderRegistry.from_catalog()
    assert "openai" in reg  # nosec B101
    assert reg.lookup("gemini").credential_refs() == ("GEMINI_API_KEY", "GOOGLE_API_KEY")  # nosec B101
    assert any(d.protocol_kind is ProtocolKind.SANDBOXED_EXEC for d in reg.descriptors())  # nosec B101


def test_catalog_path_env_override(tmp_path, monkeypatch):
    path = tmp_path / "alt.json"
    path.write_text(
        '{"providers": [{"id": "only", "protocol_kind": "gemini", "base_endpoint": "https://g.test"}]}',
        encoding="utf-8",
    )
    monkeypatch.setenv("GATEWAY_PROVIDERS_FILE", str(path))
    assert ProviderRegistry.from_catalog().ids() == ("only",)  # nosec B101


def test_streaming_capability_follows_protocol_kind():
    reg = ProviderRegistry.from_mapping(
        catalog(
            provider_entry("alpha"),
            provider_entry("gem", "gemini", discovery_path=None, default_models=["g-1"]),
            provider_entry("box", "sandboxed-exec", discovery_path=None),
        )
    )
    for d in reg.descriptors():
        adapter = reg.adapter_for(d.id)
        assert isinstance(adapter, ProtocolAdapter)  # nosec B101
        assert d.protocol_kind.is_http_streaming is isinstance(adapter, SupportsStreaming)  # nosec B101
        assert d.protocol_kind.is_http_streaming is not isinstance(adapter, SupportsExecution)  # nosec B101
    assert not ProtocolKind.SANDBOXED_EXEC.is_http_streaming  # nosec B101
