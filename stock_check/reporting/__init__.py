"""
Report output for stock check runs.

Modules
-------
export     : write_output_json() + write_display_csv() — file output.
formatters : format_stock_check_table() + format_factor_table() — terminal text.
"""
