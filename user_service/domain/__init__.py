"""
Domain layer package.

Contains pure business objects: entities, port interfaces and errors.
No framework imports, no IO, no side effects.
"""
