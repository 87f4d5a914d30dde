"""External service integration package.

Contains the tikwm.com media resolver client and webhook secret
derivation helpers.
"""
