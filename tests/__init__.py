"""check-connection Test Suite

Test modules:
    test_port_parser   core/port_parser.py edge cases
    test_resolver      getaddrinfo adapter, failure mapping
    test_prober        connect/timeout race, at-most-once settlement, cleanup
    test_asn_lookup    Cymru reply parsing + session against a local fake server
    test_orchestrator  sequencing, independence of probe and lookup, exit codes
    test_reporting     text / JSON rendering
    test_config        YAML config and override precedence
    test_cli           argument handling, streams, exit status
    test_layering      static import analysis enforcing layering rules

Run all tests:
    pytest tests/ -v
"""
