from typing import Any
import orjson


def json_encode(obj: Any) -> str:
    return orjson.dumps(obj).decode('utf-8')
