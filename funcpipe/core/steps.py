"""
Runtime introspection of pipeline steps.

Every callable handed to a pipeline is described once, at construction, by a
``StepSignature``: its parameters, its declared return slots and which of
those slots carry errors. The executor uses the descriptor to bind the carry
values of the previous step and to split each return value into values that
are forwarded and an optional error.

Return slots come from the return annotation:

* ``None``                     -> no slots (a sink)
* ``tuple[A, B]``              -> one slot per element
* ``tuple[A, ...]`` / ``tuple``  -> spread at runtime
* ``Result[T, E]``             -> value slot plus error slot
* ``T``                        -> a single slot
* no annotation                -> inferred from the returned value

A slot is error-typed when its type is an exception class, or an Optional or
Union made only of exception classes.
"""

import functools
import inspect
import types
import typing
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union, get_args, get_origin

from returns.result import Result, Success, Failure

_EMPTY = inspect.Signature.empty
_NONE_TYPES = (None, type(None), typing.NoReturn, getattr(typing, "Never", typing.NoReturn))
_NUMERIC_PROMOTIONS = {
    float: (int, float),
    complex: (int, float, complex),
}


@dataclass(frozen=True)
class ReturnSlot:
    """One declared return value of a step"""
    annotation: Any
    is_error: bool = False


@dataclass(frozen=True)
class StepSignature:
    """Introspected description of a pipeline step"""
    name: str
    signature: Optional[inspect.Signature]
    parameters: dict[str, Any] = field(default_factory=dict)
    returns: Optional[tuple[ReturnSlot, ...]] = None
    returns_result: bool = False

    @property
    def is_sink(self) -> bool:
        """True when the step forwards no values"""
        if self.returns is None:
            return False
        return all(slot.is_error for slot in self.returns)


def is_error_type(annotation: Any) -> bool:
    """Whether a declared type satisfies the error capability"""
    if isinstance(annotation, type) and get_origin(annotation) is None:
        return issubclass(annotation, BaseException)
    if get_origin(annotation) in (Union, types.UnionType):
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        return bool(members) and all(is_error_type(arg) for arg in members)
    return False


def _is_result_type(annotation: Any) -> bool:
    origin = get_origin(annotation) or annotation
    return isinstance(origin, type) and issubclass(origin, Result)


def _step_name(func: Callable) -> str:
    if isinstance(func, functools.partial):
        return f"partial({_step_name(func.func)})"
    return getattr(func, "__qualname__", None) or getattr(func, "__name__", None) or repr(func)


def _hint_target(func: Callable) -> Any:
    if isinstance(func, functools.partial):
        return _hint_target(func.func)
    if inspect.isclass(func):
        return func.__init__
    if inspect.isfunction(func) or inspect.ismethod(func) or inspect.isbuiltin(func):
        return func
    return type(func).__call__


def _type_hints(func: Callable) -> dict[str, Any]:
    # Unresolvable forward references leave the step unannotated
    try:
        return typing.get_type_hints(_hint_target(func))
    except Exception:
        return {}


def _signature(func: Callable) -> Optional[inspect.Signature]:
    # Some builtins carry no signature; those are called without binding
    try:
        return inspect.signature(func)
    except (TypeError, ValueError):
        return None


def _return_slots(annotation: Any) -> tuple[Optional[tuple[ReturnSlot, ...]], bool]:
    if annotation is _EMPTY:
        return None, False
    if annotation in _NONE_TYPES:
        return (), False
    if _is_result_type(annotation):
        args = get_args(annotation)
        value_type = args[0] if args else Any
        error_type = args[1] if len(args) > 1 else Exception
        return (ReturnSlot(value_type), ReturnSlot(error_type, is_error=True)), True
    if annotation is tuple:
        return None, False
    if get_origin(annotation) is tuple:
        args = get_args(annotation)
        if not args or (len(args) == 2 and args[1] is Ellipsis):
            return None, False
        if args == ((),):
            return (), False
        return tuple(ReturnSlot(arg, is_error_type(arg)) for arg in args), False
    return (ReturnSlot(annotation, is_error_type(annotation)),), False


def describe(func: Callable) -> StepSignature:
    """Build the descriptor for a single step"""
    hints = _type_hints(func)
    return_annotation = hints.pop("return", _EMPTY)
    if inspect.isclass(func):
        # Calling a class yields an instance of it
        returns, returns_result = (ReturnSlot(func, is_error_type(func)),), False
    else:
        returns, returns_result = _return_slots(return_annotation)

    return StepSignature(
        name=_step_name(func),
        signature=_signature(func),
        parameters=hints,
        returns=returns,
        returns_result=returns_result,
    )


def _checkable(annotation: Any) -> bool:
    if not isinstance(annotation, type) or annotation in (object, Any):
        return False
    # Parameterised generics such as list[int] are not checked
    if get_origin(annotation) is not None:
        return False
    if typing.is_typeddict(annotation):
        return False
    if getattr(annotation, "_is_protocol", False):
        return getattr(annotation, "_is_runtime_protocol", False)
    return True


def _accepts(annotation: Any, value: Any) -> bool:
    if not _checkable(annotation):
        return True
    try:
        return isinstance(value, _NUMERIC_PROMOTIONS.get(annotation, annotation))
    except TypeError:
        # Classes that refuse instance checks accept anything
        return True


def check_arguments(step: StepSignature, args: list[Any], strict_types: bool = True) -> None:
    """
    Check that ``args`` can be passed to the step.

    Raises:
        TypeError: on arity mismatch, or on a value that does not match a
            plain class annotation when ``strict_types`` is set
    """
    if step.signature is None:
        return

    try:
        bound = step.signature.bind(*args)
    except TypeError as e:
        raise TypeError(f"cannot call {step.name} with {len(args)} argument(s): {e}") from e

    if not strict_types:
        return

    for name, value in bound.arguments.items():
        annotation = step.parameters.get(name, _EMPTY)
        if annotation is _EMPTY:
            continue
        kind = step.signature.parameters[name].kind
        values = value if kind is inspect.Parameter.VAR_POSITIONAL else (value,)
        for item in values:
            if not _accepts(annotation, item):
                raise TypeError(
                    f"argument {name!r} of {step.name} must be "
                    f"{annotation.__name__}, got {type(item).__name__}"
                )


def _split_result(value: Result) -> tuple[list[Any], Any]:
    if isinstance(value, Failure):
        return [], value.failure()
    carried = value.unwrap()
    return ([] if carried is None else [carried]), None


def _infer_outputs(value: Any) -> tuple[list[Any], Any]:
    if value is None:
        return [], None
    if isinstance(value, (Success, Failure)):
        return _split_result(value)
    if isinstance(value, BaseException):
        return [], value
    if not isinstance(value, tuple):
        return [value], None
    # A trailing None or exception is the error slot, the rest are values
    if value and (value[-1] is None or isinstance(value[-1], BaseException)):
        return list(value[:-1]), value[-1]
    return list(value), None


def split_outputs(step: StepSignature, value: Any) -> tuple[list[Any], Any]:
    """
    Split a step's return value into carry values and an error.

    Slots are walked in declared order; the first error slot holding
    something other than ``None`` stops the walk.

    Returns:
        The values to forward and the error, or ``None`` when there is none
    """
    if step.returns is None:
        return _infer_outputs(value)
    if step.returns_result and isinstance(value, (Success, Failure)):
        return _split_result(value)
    if not step.returns:
        return [], None

    if len(step.returns) == 1:
        items = (value,)
    else:
        items = tuple(value)
        if len(items) != len(step.returns):
            raise TypeError(
                f"{step.name} declares {len(step.returns)} return values, "
                f"got {len(items)}"
            )

    carry = []
    for slot, item in zip(step.returns, items):
        if slot.is_error:
            if item is None:
                continue
            return carry, item
        carry.append(item)
    return carry, None
