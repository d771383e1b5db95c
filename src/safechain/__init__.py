"""safechain: chainable capture of values and failures, sync or async.

Import path convention::

    from safechain import safe, SafeChain
    from safechain.pipeline import safe_pipe, map, recover
    from safechain.config import ChainSettings, configure

Example::

    safe(2).map(lambda x: x * 2).map(lambda x: x + 3).unwrap()       # 7
    await safe(user_id).map(fetch_user).map(render).unwrap()          # async
"""

from safechain.chain import SafeChain
from safechain.constructors import safe, safe_empty, safe_exec, safe_value
from safechain.errors import (
    CapturedValueError,
    ConfigError,
    InvalidSettingValueError,
    SafeChainError,
    normalize_error,
)
from safechain.pipeline import pipe, safe_pipe
from safechain.result import Err, Ok, Result, SafeResult

safe.pipe = safe_pipe  # type: ignore[attr-defined]

__version__ = "1.0.2"
__all__ = [
    "CapturedValueError",
    "ConfigError",
    "Err",
    "InvalidSettingValueError",
    "Ok",
    "Result",
    "SafeChain",
    "SafeChainError",
    "SafeResult",
    "__version__",
    "normalize_error",
    "pipe",
    "safe",
    "safe_empty",
    "safe_exec",
    "safe_pipe",
    "safe_value",
]
