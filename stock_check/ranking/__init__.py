"""
Ranking pipeline: growth resolution, ranking, assembly, decision,
validation and display ordering.

Modules
-------
resolver  : GrowthResolution + resolve_growth() — direct vs. computed growth.
ranker    : ResolvedEntry / RankingSelection + rank_universe().
assembler : assemble_results() — merges selection with EOD prices.
decision  : Decision + decide() — trade header and sector warning.
validator : validate_output() — strict output-contract enforcement.
display   : sort_for_display() — presentation-only ordering.
"""
