"""
Message scripts: JSONL files driving a token actor.

One message per line:
    {"init": {...}}                                   initialization payload
    {"caller": "@alice", "ts": 10, "action": {...}}   one action
    {"query": {...}}                                  one query

In identity fields (caller, admin, to, from, account, ...) "@name" is replaced
by actor_id_for(name); other strings are left alone. "ts" is the
logical time of the message; without it the clock advances by one.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Optional

from ..actor import TokenActor
from ..core.clock import DeterministicClock
from ..core.errors import DecodeError
from ..core.ids import actor_id_for


@dataclass(frozen=True)
class StepResult:
    """
    Outcome of one script line.

    Fields:
        line: 1-based line number in the script
        kind: "init", "action" or "query"
        name: Action / query type tag
        caller: Caller identity (actions only)
        ts: Logical time the message was processed at
        result: Reply or query reply as a dict
    """
    line: int
    kind: str
    name: str
    caller: Optional[str]
    ts: int
    result: Dict[str, Any]


# Keys whose values are identities; "@name" is only expanded under these.
IDENTITY_KEYS = frozenset({
    "caller",
    "admin",
    "to",
    "from",
    "to_users",
    "admin_id",
    "contract_id",
    "account",
    "approved_account",
})


def _resolve_identity(value: Any) -> Any:
    if isinstance(value, str) and value.startswith("@"):
        return actor_id_for(value[1:])
    if isinstance(value, list):
        return [_resolve_identity(x) for x in value]
    return value


def resolve_names(obj: Any) -> Any:
    """Expand "@name" to actor_id_for(name) in identity fields, at any depth."""
    if isinstance(obj, dict):
        return {
            k: _resolve_identity(v) if k in IDENTITY_KEYS else resolve_names(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [resolve_names(x) for x in obj]
    return obj


def read_script(path: str) -> Iterator[tuple]:
    """
    Yield (line_number, message) for each non-empty line.

    Raises:
        DecodeError: If a line is not a JSON object
    """
    with open(path, "r", encoding="utf-8") as f:
        for idx, line in enumerate(f, start=1):
            if not line.strip():
                continue
            try:
                msg = json.loads(line)
            except json.JSONDecodeError as ex:
                raise DecodeError(f"line {idx}: invalid JSON: {ex.msg}") from ex
            if not isinstance(msg, dict):
                raise DecodeError(f"line {idx}: expected a JSON object")
            yield idx, resolve_names(msg)


def run_script(actor: TokenActor, path: str, clock: Optional[DeterministicClock] = None) -> List[StepResult]:
    """
    Feed every message of the script through actor, in order.

    Fatal errors propagate and stop the run at the offending line.
    """
    clock = clock or DeterministicClock()
    results: List[StepResult] = []

    for idx, msg in read_script(path):
        if "ts" in msg:
            clock = clock.at(int(msg["ts"]))
        else:
            clock = clock.tick()

        if "init" in msg:
            reply = actor.init(msg["init"])
            results.append(StepResult(idx, "init", "Init", None, clock.now(), reply.to_dict()))
        elif "action" in msg:
            action = msg["action"]
            caller = msg.get("caller")
            reply = actor.handle(caller, action, clock.now())
            name = action.get("type", "?") if isinstance(action, dict) else "?"
            results.append(StepResult(idx, "action", name, caller, clock.now(), reply.to_dict()))
        elif "query" in msg:
            reply = actor.query(msg["query"])
            results.append(StepResult(idx, "query", reply.type, None, clock.now(), reply.to_dict()))
        else:
            raise DecodeError(f"line {idx}: expected one of init, action, query")

    return results
