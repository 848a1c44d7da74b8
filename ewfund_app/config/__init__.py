"""
Configuration module.

Default parameters, layered loading (overrides, environment, YAML file,
defaults) and validation of the run configuration.
"""
