"""Configuration for flowstate."""

from dataclasses import dataclass

DEFAULT_PIPED_INSTANCES = (
    "https://pipedapi.kavin.rocks",
    "https://pipedapi.adminforge.de",
    "https://api.piped.yt",
)

DEFAULT_INVIDIOUS_INSTANCES = (
    "https://inv.nadeko.net",
    "https://invidious.nerdvpn.de",
    "https://yewtu.be",
)


@dataclass(frozen=True)
class CompletionConfig:
    """Text-completion service configuration.

    Any OpenAI-compatible chat completions endpoint works; Groq is the default.

    Attributes:
        api_key: API key for the completion service.
        base_url: Base URL of the OpenAI-compatible API.
        model: Model name.
        timeout: Per-request timeout in seconds.
        suggest_temperature: Sampling temperature for song suggestions.
        suggest_max_tokens: Token budget for song suggestions.
        filter_temperature: Sampling temperature for content filtering.
        filter_max_tokens: Token budget for content filtering.
    """

    api_key: str | None = None
    base_url: str = "https://api.groq.com/openai/v1"
    model: str = "llama-3.3-70b-versatile"
    timeout: float = 15.0
    suggest_temperature: float = 0.7
    suggest_max_tokens: int = 2048
    filter_temperature: float = 0.2
    filter_max_tokens: int = 1024


@dataclass(frozen=True)
class ResolverConfig:
    """Video search provider configuration.

    Attributes:
        youtube_api_keys: YouTube Data API keys. One is picked per call.
        piped_instances: Piped API base URLs, tried in order (tier 2).
        invidious_instances: Invidious base URLs, tried in order (tier 3).
        primary_timeout: Per-request timeout for the YouTube Data API.
        mirror_timeout: Per-request timeout for each mirror instance.
    """

    youtube_api_keys: tuple[str, ...] = ()
    piped_instances: tuple[str, ...] = DEFAULT_PIPED_INSTANCES
    invidious_instances: tuple[str, ...] = DEFAULT_INVIDIOUS_INSTANCES
    primary_timeout: float = 10.0
    mirror_timeout: float = 5.0


@dataclass(frozen=True)
class RetryConfig:
    """Rate-limit retry policy.

    Attributes:
        max_attempts: Total attempts including the first call.
        initial_delay: Delay in seconds before the first retry; doubles each time.
    """

    max_attempts: int = 5
    initial_delay: float = 0.5


@dataclass(frozen=True)
class GeneratorConfig:
    """Playlist generation configuration.

    Attributes:
        suggestion_count: Number of songs to ask the model for.
        resolve_concurrency: Maximum concurrent resolution tasks.
            None launches one task per suggestion at once.
    """

    suggestion_count: int = 30
    resolve_concurrency: int | None = None
