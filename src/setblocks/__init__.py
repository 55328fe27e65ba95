from setblocks._blockset import BlockSet
from setblocks._cli import main
from setblocks._config import contracts_enabled, force_contracts
from setblocks._errors import InvalidArgument
from setblocks._laws import LawResult, check_injective, check_laws, check_order_independent
from setblocks._ops import all_match, any_match, each, map, match, none_match, reduce, reject, select
from setblocks._strategies import register_element_strategy

__all__ = [
    "BlockSet",
    "InvalidArgument",
    "LawResult",
    "all_match",
    "any_match",
    "check_injective",
    "check_laws",
    "check_order_independent",
    "contracts_enabled",
    "each",
    "force_contracts",
    "main",
    "map",
    "match",
    "none_match",
    "reduce",
    "register_element_strategy",
    "reject",
    "select",
]
