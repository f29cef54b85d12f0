"""
Locked 43-factor model.

Modules
-------
spec  : FactorDefinition / FactorSpec + FACTORS_43 table + get_spec().
model : normalize_factor_value() + compute_factor_score() + compute_growth()
        — pure functions, no I/O.
"""
