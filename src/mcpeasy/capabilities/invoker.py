"""
Method invocation with argument conversion and result serialization.

Arguments arrive as a flat name -> value map. Each formal parameter is looked up by its external
name, converted to the declared type with pydantic and passed to the bound method.

NOTE: required-ness is advertised in the schema but never enforced here. A missing argument is
bound to None (or left to the Python default), the method decides what to do with it.
"""
import asyncio
import dataclasses
import functools
import inspect
import logging
import types
from collections.abc import Coroutine, Mapping
from typing import Any, get_origin, is_typeddict

import anyio.to_thread
from pydantic import BaseModel, ConfigDict, PydanticUserError, TypeAdapter, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from ..errors import ArgumentResolutionError, InvocationError, MethodAccessError, TargetInvocationError
from .base import ParameterInfo, describe_parameters
from .schemas import CapabilityDefinition

logger = logging.getLogger(__name__)

_ABSENT = object()

_SCALAR_RESULTS = (str, int, float, bool)


def _is_structured(target: Any) -> bool:
    return get_origin(target) is None and isinstance(target, type) and (
        issubclass(target, BaseModel) or dataclasses.is_dataclass(target) or is_typeddict(target)
    )


@functools.lru_cache(maxsize=256)
def _type_adapter(target: Any) -> TypeAdapter:
    # Models carry their own config, pydantic refuses a second one
    if _is_structured(target):
        return TypeAdapter(target)
    return TypeAdapter(target, config=ConfigDict(coerce_numbers_to_str=True))


class MethodInvoker:
    """Invokes capability definitions with a flat argument map."""

    def invoke(self, definition: CapabilityDefinition, arguments: Mapping[str, Any] | None = None) -> Any:
        """
        Invoke a definition's method.

        Coroutine methods are run to completion with asyncio.run, so this must not be called from
        inside a running event loop for them. Use ainvoke there.

        Args:
            definition: The capability to call
            arguments: Argument values keyed by external parameter name

        Returns:
            None, a str/int/float/bool unchanged, or a JSON-compatible tree for anything else

        Raises:
            InvocationError: If the arguments cannot be converted, the method is not accessible
                or the method itself raised
        """
        bound = self._bind(definition)
        args, kwargs = self._convert_parameters(bound, arguments or {})

        try:
            result = bound(*args, **kwargs)
        except Exception as e:
            raise self._target_error(definition, e) from e

        if inspect.iscoroutine(result):
            result = self._run_coroutine(definition, result)
        return self._convert_result(result)

    async def ainvoke(self, definition: CapabilityDefinition, arguments: Mapping[str, Any] | None = None) -> Any:
        """
        Async variant of invoke.

        Coroutine methods are awaited. Plain methods run in a worker thread so a slow
        method does not block the event loop.
        """
        bound = self._bind(definition)
        args, kwargs = self._convert_parameters(bound, arguments or {})

        try:
            if inspect.iscoroutinefunction(definition.method):
                result = await bound(*args, **kwargs)
            else:
                result = await anyio.to_thread.run_sync(functools.partial(bound, *args, **kwargs))
                if inspect.iscoroutine(result):
                    result = await result
        except Exception as e:
            raise self._target_error(definition, e) from e

        return self._convert_result(result)

    def _target_error(self, definition: CapabilityDefinition, error: Exception) -> TargetInvocationError:
        logger.debug(f"'{definition.key}' raised {type(error).__name__}: {error}")
        return TargetInvocationError(error)

    def _run_coroutine(self, definition: CapabilityDefinition, coro: Coroutine) -> Any:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            pass
        else:
            coro.close()
            raise InvocationError(
                f"Failed to invoke method: '{definition.key}' is a coroutine and an event loop is "
                f"already running, use ainvoke"
            )

        try:
            return asyncio.run(coro)
        except Exception as e:
            raise self._target_error(definition, e) from e

    def _bind(self, definition: CapabilityDefinition) -> types.MethodType:
        method = definition.method
        name = getattr(method, "__name__", repr(method))
        if not inspect.isfunction(method) or definition.instance is None:
            raise MethodAccessError(name)
        return types.MethodType(method, definition.instance)

    def _convert_parameters(self, bound: types.MethodType, arguments: Mapping[str, Any]) -> tuple[list, dict]:
        """
        Build the call arguments in declaration order.

        Positional-only parameters always get a value (default or None) so later ones stay in place.
        Other parameters that are absent and have a default are left out of the call.
        """
        args: list[Any] = []
        kwargs: dict[str, Any] = {}

        for info in describe_parameters(bound):
            param = info.parameter
            try:
                value = self._resolve(info, arguments)
            except InvocationError:
                raise
            except Exception as e:
                # Validators and constructors may raise anything, not only ValidationError
                raise ArgumentResolutionError(info.external_name or info.identifier, str(e)) from e

            if value is _ABSENT:
                if param.default is not inspect.Parameter.empty:
                    if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                        args.append(param.default)
                    continue
                value = None

            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(value)
            else:
                kwargs[param.name] = value

        return args, kwargs

    def _resolve(self, info: ParameterInfo, arguments: Mapping[str, Any]) -> Any:
        name = info.external_name
        if name is None or name not in arguments:
            return _ABSENT

        value = arguments[name]
        if value is None:
            return None
        return self._convert_parameter(name, value, info.annotation)

    def _convert_parameter(self, name: str, value: Any, target: Any) -> Any:
        """Convert a single value to the target type."""
        if target is Any or target is object:
            return value
        if isinstance(target, type) and type(value) is target:
            return value

        try:
            adapter = _type_adapter(target)
        except (PydanticUserError, TypeError):
            return self._convert_plain_class(name, value, target)

        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            details = "; ".join(error["msg"] for error in e.errors())
            raise ArgumentResolutionError(name, details) from e

    def _convert_plain_class(self, name: str, value: Any, target: Any) -> Any:
        """
        Fallback for classes pydantic has no schema for.
        A mapping is passed to the constructor by field name.
        """
        if isinstance(target, type) and isinstance(value, target):
            return value
        if isinstance(target, type) and isinstance(value, Mapping):
            try:
                return target(**value)
            except Exception as e:
                raise ArgumentResolutionError(name, str(e)) from e
        raise ArgumentResolutionError(name, f"cannot convert {type(value).__name__} to {target!r}")

    def _convert_result(self, result: Any) -> Any:
        """Scalars pass through, everything else becomes a JSON-compatible tree."""
        if result is None or isinstance(result, _SCALAR_RESULTS):
            return result
        try:
            return to_jsonable_python(result)
        except PydanticSerializationError as e:
            raise InvocationError(f"Failed to invoke method: result is not serializable: {e}") from e
