__all__ = ["Configurable"]

from typing import Any, Mapping, Optional, Type, TypeVar, Union, cast

from .collections.dict import chain_get, chain_get_typed, chain_item, chain_item_typed
from .io.files import load_config_file

T = TypeVar("T")

ConfigSource = Union[str, Mapping[str, Any], None]


class Configurable:
    """Holds a dict of settings loaded from YAML/JSON files or mappings.

    ``defaults`` is loaded first and ``configs`` is laid over it key by key,
    so a partial override file only needs the keys it changes.
    """

    def __init__(self, configs: ConfigSource = None, defaults: ConfigSource = None):
        self.configs = {}
        self.set_configs(self._load(defaults))
        self.set_configs(self._load(configs))

    @staticmethod
    def _load(configs: ConfigSource) -> Mapping[str, Any]:
        if configs is None:
            return {}
        if isinstance(configs, str):
            configs = load_config_file(configs)
        return cast(Mapping[str, Any], configs)

    def get_configs(self, deep: bool = True):
        r = {}

        if deep:
            for key, value in self.__dict__.items():
                if isinstance(value, Configurable):
                    r[key] = value.get_configs(deep=True)

        if self.configs:
            r.update(self.configs)

        return r

    def get_config(
        self,
        *name,
        required: bool = True,
        typed: Optional[Type[T]] = None,
        allow_convert: bool = False,
    ) -> Union[T, Any, None]:
        if required:
            if typed is not None:
                return chain_item_typed(
                    self.configs, typed, *name, allow_convert=allow_convert
                )
            return chain_item(self.configs, *name)
        else:
            if typed is not None:
                return chain_get_typed(
                    self.configs, typed, *name, allow_convert=allow_convert
                )
            return chain_get(self.configs, *name)

    def set_configs(self, configs: Mapping[str, Any]):
        if not configs:
            return self

        nested_configs = {}
        for key, value in configs.items():
            if isinstance(value, Mapping) and isinstance(
                getattr(self, key, None), Configurable
            ):
                nested_configs[key] = value
            else:
                self.configs[key] = value

        for key, value in nested_configs.items():
            getattr(self, key).set_configs(value)

        return self
