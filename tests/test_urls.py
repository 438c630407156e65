"""URL composition for every backend variant."""

import pytest

from llmlink import (
    APIType,
    Client,
    ConfigurationError,
    MalformedSuffixError,
    default_azure_config,
    default_cloudflare_azure_config,
    default_config,
)
from llmlink.urls import strip_trailing_slash, with_api_version


CLOUDFLARE_BASE = (
    "https://gateway.ai.cloudflare.com/v1/dnekeim2i39dmm4mldemakiem3i4mkw3"
    "/demo/azure-openai/resource/chatgpt-demo"
)


class TestOpenAIFullURL:
    @pytest.mark.parametrize(
        "suffix, expected",
        [
            ("/chat/completions", "https://api.openai.com/v1/chat/completions"),
            ("/completions", "https://api.openai.com/v1/completions"),
        ],
    )
    def test_default_endpoint(self, suffix, expected):
        cli = Client(default_config("dummy"))
        assert cli.full_url(suffix) == expected

    def test_model_is_ignored(self):
        cli = Client(default_config("dummy"))
        assert cli.full_url("/embeddings", "text-embedding-3-small") == (
            "https://api.openai.com/v1/embeddings"
        )

    def test_suffix_query_untouched(self):
        cli = Client(default_config("dummy"))
        assert cli.full_url("/files?purpose=fine-tune") == (
            "https://api.openai.com/v1/files?purpose=fine-tune"
        )


class TestAzureFullURL:
    @pytest.mark.parametrize("base_url", ["https://httpbin.org/", "https://httpbin.org"])
    def test_trailing_slash_stripped(self, base_url):
        cli = Client(default_azure_config("dummy", base_url))
        assert cli.full_url("/chat/completions", "chatgpt-demo") == (
            "https://httpbin.org/openai/deployments/chatgpt-demo"
            "/chat/completions?api-version=2023-05-15"
        )

    def test_suffix_query_follows_api_version(self):
        cli = Client(default_azure_config("dummy", "https://httpbin.org"))
        actual = cli.full_url(
            "/threads/thread_SadcnESWTs6WLssltVh9Xbvz/messages?run_id=run_3RppeQFcvcCZXHGb4BK5RP02",
            "chatgpt-demo",
        )
        assert actual == (
            "https://httpbin.org/openai/deployments/chatgpt-demo"
            "/threads/thread_SadcnESWTs6WLssltVh9Xbvz/messages"
            "?api-version=2023-05-15&run_id=run_3RppeQFcvcCZXHGb4BK5RP02"
        )

    def test_azure_ad_uses_same_shape(self):
        cfg = default_azure_config("dummy", "https://example.openai.azure.com").replace(
            api_type=APIType.AZURE_AD
        )
        assert Client(cfg).full_url("/embeddings", "ada") == (
            "https://example.openai.azure.com/openai/deployments/ada/embeddings?api-version=2023-05-15"
        )

    def test_deployment_name_drops_dots_and_colons(self):
        cli = Client(default_azure_config("dummy", "https://httpbin.org"))
        assert cli.full_url("/chat/completions", "gpt-3.5-turbo") == (
            "https://httpbin.org/openai/deployments/gpt-35-turbo/chat/completions?api-version=2023-05-15"
        )

    def test_custom_deployment_mapper(self):
        cfg = default_azure_config("dummy", "https://httpbin.org").replace(
            deployment_mapper=lambda model: {"gpt-4o": "prod-4o"}.get(model, model)
        )
        assert Client(cfg).full_url("/chat/completions", "gpt-4o").startswith(
            "https://httpbin.org/openai/deployments/prod-4o/"
        )

    def test_missing_model_rejected(self):
        cli = Client(default_azure_config("dummy", "https://httpbin.org"))
        with pytest.raises(ConfigurationError):
            cli.full_url("/chat/completions")

    def test_model_mapping_to_empty_name_rejected(self):
        cli = Client(default_azure_config("dummy", "https://httpbin.org"))
        with pytest.raises(ConfigurationError) as excinfo:
            cli.full_url("/chat/completions", "..")
        assert excinfo.value.key == "model"

    def test_mapper_returning_empty_rejected(self):
        cfg = default_azure_config("dummy", "https://httpbin.org").replace(deployment_mapper=lambda model: "")
        with pytest.raises(ConfigurationError):
            Client(cfg).full_url("/chat/completions", "gpt-4o")

    def test_version_filled_when_type_switched(self):
        cfg = default_config("dummy").replace(api_type=APIType.AZURE, base_url="https://httpbin.org")
        assert Client(cfg).full_url("/chat/completions", "m").endswith("?api-version=2023-05-15")


class TestCloudflareAzureFullURL:
    @pytest.mark.parametrize("base_url", [CLOUDFLARE_BASE + "/", CLOUDFLARE_BASE])
    def test_trailing_slash_stripped(self, base_url):
        cli = Client(default_cloudflare_azure_config("dummy", base_url))
        assert cli.full_url("/chat/completions") == (
            CLOUDFLARE_BASE + "/chat/completions?api-version=2023-05-15"
        )

    def test_no_deployments_segment(self):
        cli = Client(default_cloudflare_azure_config("dummy", CLOUDFLARE_BASE))
        assert "openai/deployments" not in cli.full_url("/chat/completions", "chatgpt-demo")

    def test_suffix_query_follows_api_version(self):
        cli = Client(default_cloudflare_azure_config("dummy", CLOUDFLARE_BASE))
        assert cli.full_url("/files?purpose=assistants&limit=5") == (
            CLOUDFLARE_BASE + "/files?api-version=2023-05-15&purpose=assistants&limit=5"
        )


class TestSuffixValidation:
    @pytest.mark.parametrize(
        "cfg",
        [
            default_config("dummy"),
            default_azure_config("dummy", "https://httpbin.org"),
            default_cloudflare_azure_config("dummy", CLOUDFLARE_BASE),
        ],
    )
    def test_suffix_without_leading_slash(self, cfg):
        with pytest.raises(MalformedSuffixError):
            Client(cfg).full_url("chat/completions", "chatgpt-demo")


class TestHelpers:
    def test_strip_only_one_slash(self):
        assert strip_trailing_slash("https://a.example//") == "https://a.example/"
        assert strip_trailing_slash("https://a.example") == "https://a.example"

    def test_api_version_keeps_query_verbatim(self):
        assert with_api_version("/x?b=2&a=%20", "v") == "/x?api-version=v&b=2&a=%20"

    @pytest.mark.parametrize("api_type", list(APIType))
    @pytest.mark.parametrize("suffix", ["/chat/completions", "/threads/t_1/messages?run_id=r_1"])
    def test_trailing_slash_idempotent_for_every_variant(self, api_type, suffix):
        base = "https://proxy.example.com/v1"
        cfg = default_config("dummy").replace(api_type=api_type, base_url=base)
        with_slash = cfg.replace(base_url=base + "/")
        expected = Client(cfg).full_url(suffix, "chatgpt-demo")
        assert Client(with_slash).full_url(suffix, "chatgpt-demo") == expected
        assert "//" not in expected.split("://", 1)[1]

    @pytest.mark.parametrize("api_type", list(APIType))
    def test_every_variant_has_a_builder(self, api_type):
        cfg = default_azure_config("dummy", "https://httpbin.org").replace(api_type=api_type)
        url = Client(cfg).full_url("/chat/completions", "chatgpt-demo")
        assert url.startswith("https://")
