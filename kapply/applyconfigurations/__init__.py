"""
Declarative configurations of the resources for the server-side apply.

The modules are named after the API groups of the types they contain.
Importing this package registers all the types in the default schema registry.
"""
from kapply.applyconfigurations import base, core, events, meta
