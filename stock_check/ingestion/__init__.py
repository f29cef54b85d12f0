"""
Input collaborators.  Nothing here touches the network.

Modules
-------
universe_file : load_universe() + load_price_map() — local JSON/CSV readers.
mock_universe : make_mock_universe() + make_mock_factor_inputs() +
                mock_price_map() — deterministic synthetic data.
"""
