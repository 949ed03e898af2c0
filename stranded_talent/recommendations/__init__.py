"""
Recommendation engine: converts profile signals and the analyst's selection
into an ordered list of strategy statements.

Modules
-------
composer : Recommendation dataclass + compose_recommendations() +
           is_trade_occupation() — pure functions, no I/O.
"""
