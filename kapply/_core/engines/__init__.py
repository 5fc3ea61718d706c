"""
The engines do the actual work on the live objects: e.g. the extraction
of the owned fields. They depend on the structs, but not vice versa.
"""
