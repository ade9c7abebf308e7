from typing import Any, Tuple, Type, Union


def check_param(param: Any, param_name: str, param_type: Union[Type, Tuple[Type, ...]],
                optional: bool=False) -> None:
    if param is None:
        if not optional:
            raise ValueError(f'Non-optional parameter `{param_name}` was set to None.')
        return
    # bool is an int subclass, but never a valid counter or tag
    if isinstance(param, bool) and param_type is int:
        raise ValueError(f'Parameter `{param_name}` must be of type `int` '
                         f'and `bool` type was provided.')
    if not isinstance(param, param_type):
        if isinstance(param_type, type):
            type_names: str = f'`{param_type.__name__}`'
        else:
            type_names = ' or '.join(f'`{typ.__name__}`' for typ in param_type)
        raise ValueError(f'Parameter `{param_name}` must be of type {type_names} '
                         f'and `{type(param).__name__}` type was provided.')
