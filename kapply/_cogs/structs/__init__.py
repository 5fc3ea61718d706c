"""
All the structures and functions to represent and read the resource fields:
the live bodies, the owned field sets, and the type schemas.

All the functions are purely data-manipulative and computational.
No external calls or any i/o activities are done here.
"""
