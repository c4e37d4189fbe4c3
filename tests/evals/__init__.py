"""
EVALs Suite for PyMatPop - Numerical Edge Cases

Philosophy:
    These tests target the inputs real demographic databases contain and
    that break naive implementations: nilpotent and reducible matrices,
    immortal stages, stages that can never reproduce, huge and tiny rates.
    - Each eval documents the behaviour the library commits to
    - Use pytest.mark.xfail for known limitations

Run tests:
    pytest tests/evals/ -v                    # Run all evals
    pytest tests/ --ignore=tests/evals/      # Run regular tests only
"""
