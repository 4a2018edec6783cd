"""
Listener and cache wiring.

The cache mode is picked from an ordered table (first match wins), then the
quit-endpoint overlay is applied on top of whatever the mode produced:

    persistent  cache.persist                                  listener + persisted cache
    ephemeral   cache.enable and not pre_populate_only
                and not init                                   listener + in-memory cache
    none        always                                         nothing

Any listener requires a cache stanza on the agent side, so the overlay adds an
empty cache when it has to create a listener on its own.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..logging_config import logger
from ..config import AgentDefaults, get_defaults
from ..intent import AgentIntent
from ..schemas import AgentAPI, Cache, CachePersist, Listener
from .config import LISTENER_HOST, LISTENER_TYPE, PERSIST_TYPE


@dataclass(frozen=True)
class CacheMode:
    """One row of the cache decision table."""
    name: str
    applies: Callable[[AgentIntent, bool], bool]
    make_cache: Callable[[AgentIntent, AgentDefaults], Optional[Cache]]


def _persistent_cache(intent: AgentIntent, defaults: AgentDefaults) -> Cache:
    return Cache(
        use_auto_auth_token=intent.cache.use_auto_auth_token,
        persist=CachePersist(
            type=PERSIST_TYPE,
            path=defaults.cache_volume_path,
            keep_after_import=intent.cache.keep_after_import,
            exit_on_err=intent.cache.exit_on_err,
            service_account_token_file=intent.cache.service_account_token_file,
        ),
    )


def _ephemeral_cache(intent: AgentIntent, defaults: AgentDefaults) -> Cache:
    return Cache(use_auto_auth_token=intent.cache.use_auto_auth_token)


CACHE_MODES: List[CacheMode] = [
    CacheMode(
        name="persistent",
        applies=lambda intent, init: intent.cache.persist,
        make_cache=_persistent_cache,
    ),
    CacheMode(
        name="ephemeral",
        applies=lambda intent, init: intent.cache.enable and not intent.pre_populate_only and not init,
        make_cache=_ephemeral_cache,
    ),
    CacheMode(
        name="none",
        applies=lambda intent, init: True,
        make_cache=lambda intent, defaults: None,
    ),
]


class ListenerCacheWirer:
    """
    Decides whether the agent gets a listener and cache, and how they look.
    """

    def __init__(self, defaults: Optional[AgentDefaults] = None, modes: Optional[List[CacheMode]] = None):
        self.defaults = defaults or get_defaults()
        self.modes = modes if modes is not None else CACHE_MODES

    def default_listener(self, intent: AgentIntent) -> Listener:
        """Local plaintext TCP listener on the configured cache port."""
        port = intent.cache.listener_port or self.defaults.listener_port
        return Listener(
            type=LISTENER_TYPE,
            address=f"{LISTENER_HOST}:{port}",
            tls_disable=True,
        )

    def select_mode(self, intent: AgentIntent, init: bool) -> CacheMode:
        """Return the first cache mode whose condition holds."""
        for mode in self.modes:
            if mode.applies(intent, init):
                return mode
        # Unreachable with CACHE_MODES, whose last row always applies
        raise LookupError("no cache mode applies")

    def wire(self, intent: AgentIntent, init: bool) -> Tuple[List[Listener], Optional[Cache]]:
        """
        Build the listener list and cache stanza for an intent.

        Args:
            intent: Agent intent
            init: True when synthesizing the init container's config

        Returns:
            (listeners, cache) - listeners may be empty and cache may be None
        """
        mode = self.select_mode(intent, init)
        cache = mode.make_cache(intent, self.defaults)
        listeners = [self.default_listener(intent)] if cache is not None else []
        logger.debug(f"Cache mode '{mode.name}' selected (init={init})")

        if intent.enable_quit:
            listeners, cache = self.apply_quit_endpoint(intent, listeners, cache)

        return listeners, cache

    def apply_quit_endpoint(
        self,
        intent: AgentIntent,
        listeners: List[Listener],
        cache: Optional[Cache],
    ) -> Tuple[List[Listener], Optional[Cache]]:
        """Enable the quit endpoint on the first listener, creating one (and a cache) if needed."""
        if not listeners:
            listeners = [self.default_listener(intent)]
        listeners[0].agent_api = AgentAPI(enable_quit=True)

        if cache is None:
            cache = Cache()
        logger.debug(f"Quit endpoint enabled on listener {listeners[0].address}")
        return listeners, cache
