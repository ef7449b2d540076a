"""stepwise: behavior-driven tests for a calculator and a temperature converter.

Scenarios live in features/*.feature and are bound to Python with behave
step definitions in features/steps/. The stepwise CLI runs them through
behave and reports with Rich.

Usage:
    python -m stepwise                                  # Run every feature
    python -m stepwise run features/calculator.feature  # Run one file
    python -m stepwise run features/calculator.feature:12 -v
    python -m stepwise list                             # Show features and scenarios
    python -m stepwise steps                            # Show step definitions
"""
