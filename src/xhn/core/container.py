"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from xhn.api import HypermediaApi, Hypermediator
from xhn.codec import NavalCodec
from xhn.core.config import Settings, get_settings


class CoreModule(Module):
    """Core dependencies."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        """Provide settings, from the environment unless given explicitly."""
        return self.settings or get_settings()

    @singleton
    @provider
    def provide_codec(self, settings: Settings) -> NavalCodec:
        """Provide the NavAL codec configured from settings."""
        return NavalCodec.from_settings(settings)

    @provider
    def provide_api(self, settings: Settings, codec: NavalCodec) -> HypermediaApi:
        """Provide a fresh, empty hypermedia API sharing the configured codec."""
        return HypermediaApi.from_settings(settings, codec=codec)

    @singleton
    @provider
    def provide_hypermediator(self, settings: Settings) -> Hypermediator:
        """Provide a hypermediator listening where settings say."""
        return Hypermediator.from_settings(settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector."""
    return Injector([CoreModule(settings)])
