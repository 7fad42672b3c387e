# colorizer/services/rule_colorizer.py
import threading
from types import MappingProxyType
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import structlog

from colorizer.core.domain.events import ChangeListener, ColorizerEvent, EventType
from colorizer.core.domain.models import (
    DEFAULT_COLOR_RULE_NAME,
    Color,
    ColorRule,
    RuleStore,
    build_default_rules,
    default_colors,
)
from colorizer.core.ports.color_settings_repository import IColorSettingsRepository
from colorizer.core.ports.colorizer import IColorizer
from colorizer.core.ports.predicate_compiler import IPredicate, IPredicateCompiler
from colorizer.shared.observability import get_tracer

logger = structlog.get_logger()
tracer = get_tracer(__name__)

class RuleColorizer(IColorizer):
    """
    A colorizer driven by an ordered collection of ColorRules, grouped into
    named rule sets, with change notification for the views that paint them.

    Responsibilities:
    1. Owns the rule store and the name of the active rule set.
    2. Answers foreground/background lookups, first matching rule wins.
    3. Notifies listeners when rule content changes.
    4. Saves and loads the whole store through the settings repository.

    Switching the active rule set and removing a rule do not notify.
    """

    def __init__(
        self,
        compiler: IPredicateCompiler,
        repository: Optional[IColorSettingsRepository] = None,
        default_rule_set_name: str = DEFAULT_COLOR_RULE_NAME,
        palette: Optional[Sequence[Color]] = None,
    ):
        self.compiler = compiler
        self.repository = repository
        self.default_rule_set_name = default_rule_set_name
        self._palette: Tuple[Color, ...] = tuple(palette) if palette is not None else default_colors()

        # Guards the store, the active name, the auxiliary rules and the listeners.
        self._lock = threading.RLock()
        self._rules: RuleStore = {}
        self._current_rule_set = default_rule_set_name
        self._find_rule: Optional[IPredicate] = None
        self._logger_rule: Optional[IPredicate] = None
        self._listeners: List[ChangeListener] = []

        self.set_rules({default_rule_set_name: build_default_rules(compiler)})

    # --- Notification ---

    def add_change_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_change_listener(self, listener: ChangeListener) -> None:
        with self._lock:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass

    def _fire_rules_changed(self) -> None:
        # Listeners run after the lock is released; they may call back in.
        with self._lock:
            listeners = list(self._listeners)
            event = ColorizerEvent(type=EventType.COLOR_RULES_CHANGED, rule_set=self._current_rule_set)

        for listener in listeners:
            try:
                listener(event)
            except Exception as e:
                # A broken view must not stop the others from repainting.
                logger.error("color_listener_failed", listener=repr(listener), error=str(e), exc_info=True)

    # --- Auxiliary Rules ---

    def set_find_rule(self, find_rule: Optional[IPredicate]) -> None:
        with self._lock:
            self._find_rule = find_rule
        self._fire_rules_changed()

    def get_find_rule(self) -> Optional[IPredicate]:
        with self._lock:
            return self._find_rule

    def set_logger_rule(self, logger_rule: Optional[IPredicate]) -> None:
        with self._lock:
            self._logger_rule = logger_rule
        self._fire_rules_changed()

    def get_logger_rule(self) -> Optional[IPredicate]:
        with self._lock:
            return self._logger_rule

    # --- Rule Store ---

    def set_rules(self, rules: Mapping[str, Sequence[ColorRule]]) -> None:
        """
        Replaces every rule set. The active name is kept even if `rules`
        has no entry for it; lookups then match nothing.
        """
        with self._lock:
            self._rules = {name: list(rule_list) for name, rule_list in rules.items()}
        self._fire_rules_changed()

    def get_rules(self) -> Mapping[str, Tuple[ColorRule, ...]]:
        """Returns a read-only snapshot. Mutate through the methods below."""
        with self._lock:
            return MappingProxyType({name: tuple(rule_list) for name, rule_list in self._rules.items()})

    def get_current_rules(self) -> Optional[Tuple[ColorRule, ...]]:
        with self._lock:
            rule_list = self._rules.get(self._current_rule_set)
            return tuple(rule_list) if rule_list is not None else None

    def add_rules(self, new_rules: Mapping[str, Sequence[ColorRule]]) -> None:
        """
        Merges rule sets into the store. Rules for an existing name are
        appended after the rules already there, so they match last.
        """
        with self._lock:
            for name, rule_list in new_rules.items():
                if name in self._rules:
                    self._rules[name].extend(rule_list)
                else:
                    self._rules[name] = list(rule_list)
        self._fire_rules_changed()

    def add_rule(self, rule_set_name: str, rule: ColorRule) -> None:
        with self._lock:
            self._rules.setdefault(rule_set_name, []).append(rule)
        self._fire_rules_changed()

    def remove_rule(self, rule_set_name: str, expression: str) -> None:
        """Removes the first rule whose text equals `expression`, if any. Silent."""
        with self._lock:
            rule_list = self._rules.get(rule_set_name)
            if rule_list is None:
                return

            for i, rule in enumerate(rule_list):
                if rule.expression == expression:
                    del rule_list[i]
                    return

    def set_current_rule_set(self, rule_set_name: str) -> None:
        with self._lock:
            self._current_rule_set = rule_set_name

    @property
    def current_rule_set(self) -> str:
        with self._lock:
            return self._current_rule_set

    # --- Lookups ---

    def get_background_color(self, event: Any) -> Optional[Color]:
        with self._lock:
            for rule in self._rules.get(self._current_rule_set, ()):
                if rule.background is not None and rule.evaluate(event):
                    return rule.background
        return None

    def get_foreground_color(self, event: Any) -> Optional[Color]:
        with self._lock:
            for rule in self._rules.get(self._current_rule_set, ()):
                if rule.foreground is not None and rule.evaluate(event):
                    return rule.foreground
        return None

    def get_default_colors(self) -> Tuple[Color, ...]:
        """The accent palette offered to color pickers."""
        return self._palette

    # --- Persistence ---

    def save_color_settings(self, name: str) -> bool:
        """
        Saves every rule set (not only `name`) under the key `name`.
        Best-effort: failures are logged by the repository.
        """
        if self.repository is None:
            logger.warning("color_settings_repository_missing", operation="save", name=name)
            return False

        snapshot = self.get_rules()
        with tracer.start_as_current_span("colorizer.save_color_settings") as span:
            span.set_attribute("colorizer.settings_name", name)
            span.set_attribute("colorizer.rule_sets", len(snapshot))
            saved = self.repository.save(name, snapshot)
            span.set_attribute("colorizer.saved", saved)
        return saved

    def load_color_settings(self, name: str) -> bool:
        """
        Loads the settings saved under `name`, falling back to the default
        rule set name. If neither exists the current rules stay in place.

        Returns:
            True if a stored rule store replaced the current one.
        """
        if self.repository is None:
            logger.warning("color_settings_repository_missing", operation="load", name=name)
            return False

        with tracer.start_as_current_span("colorizer.load_color_settings") as span:
            span.set_attribute("colorizer.settings_name", name)

            loaded = self.repository.load(name)
            if loaded is None and name != self.default_rule_set_name:
                logger.info("color_settings_fallback", name=name, fallback=self.default_rule_set_name)
                loaded = self.repository.load(self.default_rule_set_name)

            span.set_attribute("colorizer.loaded", loaded is not None)

        if loaded is None:
            return False

        self.set_rules(loaded)
        return True
