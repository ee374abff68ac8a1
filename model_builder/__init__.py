"""Doctrine Model Builder.

Generates PHP Doctrine model classes from YAML schema files and
post-processes the generated base classes with accessor documentation
and project-specific phpdoc tokens.
"""

__version__ = "0.1.0"
