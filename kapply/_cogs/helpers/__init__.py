"""
General-purpose helpers not related to apply configurations themselves,
which are used to prepare and control the runtime environment.

Helpers do not depend on anything else in the library. They implement no
concepts of server-side apply or field ownership, only low-level patterns
that could be extracted as reusable libraries.
If they implement concepts of the library, they are not "helpers"
(consider making them structs or engines).
"""
