"""
Small dependency injection container.

Factories are called with keyword arguments looked up by parameter name
among the registered properties, e.g. a factory taking ``logger`` gets the
instance registered as ``"logger"``.
"""

__all__ = ["Context"]

import inspect
import logging
from typing import Callable, Dict, Mapping, Optional, Sequence, TypeVar, Union

T = TypeVar("T")

NO_DEFAULT = inspect.Parameter.empty


class Context:
    def __init__(self, logger: Optional[logging.Logger] = None):
        self.instances = {}
        self.factories = {}
        self.logger = logger

    def register(
        self,
        property: str,
        factory: Union[T, Callable[..., T]],
        *factory_args,
        **factory_kw,
    ):
        """Registers a factory (or a raw value) for the given property name."""
        if (factory_args or factory_kw) and not callable(factory):
            raise ValueError(
                "Only callable factory supports extra args: %s, %s(%s, %s)"
                % (property, factory, factory_args, factory_kw)
            )

        self.factories[property] = factory, factory_args, factory_kw
        self.instances.pop(property, None)

    def get(self, property: str):
        """Returns the singleton instance of a registered property."""
        if property not in self.factories:
            raise KeyError(f"No factory for: {property}")

        if property not in self.instances:
            factory, factory_args, factory_kw = self.factories[property]
            self.instances[property] = self._instantiate(
                property, factory, factory_args, factory_kw
            )
        return self.instances[property]

    def build(
        self, factory: Union[T, Callable[..., T]], *factory_args, **factory_kw
    ) -> T:
        """Invokes the given factory to build a configured instance."""
        return self._instantiate("", factory, factory_args, factory_kw)

    def _instantiate(
        self,
        name: str,
        factory: Union[T, Callable[..., T]],
        factory_args: Sequence,
        factory_kw: Mapping[str, object],
    ) -> T:
        if not callable(factory):
            return factory

        kwargs = self._prepare_kwargs(factory, factory_args, factory_kw)
        if self.logger:
            self.logger.debug(
                "Property %r: %s(%s, %s)",
                name,
                getattr(factory, "__name__", factory),
                factory_args,
                kwargs,
            )
        return factory(*factory_args, **kwargs)

    def _prepare_kwargs(
        self,
        factory: Callable,
        factory_args: Sequence,
        factory_kw: Mapping[str, object],
    ) -> Dict[str, object]:
        kwargs = {}
        for arg, default in get_argdefaults(factory, len(factory_args)).items():
            if arg in factory_kw:
                continue
            elif arg in self.factories:
                kwargs[arg] = self.get(arg)
            elif default is NO_DEFAULT:
                raise KeyError(f"No factory for arg: {arg}")

        kwargs.update(factory_kw)
        return kwargs


def get_argdefaults(factory: Callable, num_skipped: int = 0) -> Dict[str, object]:
    """Returns (arg_name, default_value) pairs of positional-or-keyword args."""
    sig = inspect.signature(factory)
    args = {
        param.name: param.default
        for param in sig.parameters.values()
        if param.kind
        in (
            inspect.Parameter.POSITIONAL_ONLY,
            inspect.Parameter.POSITIONAL_OR_KEYWORD,
            inspect.Parameter.KEYWORD_ONLY,
        )
    }
    return dict(list(args.items())[num_skipped:])
