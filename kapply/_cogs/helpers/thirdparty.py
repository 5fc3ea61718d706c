"""
Type definitions from optional 3rd-party libraries, e.g. the kubernetes client.

This utility does the trickery needed to recognise the objects of a library
only if it is installed, and to miss all ``isinstance()`` checks otherwise.
"""
import abc
from typing import Any


# Kubernetes client does not have any common base classes, its code is fully generated.
# Only recognise classes from a specific module. Ignore all API/HTTP/auth-related tools.
class KubernetesModel(abc.ABC):
    @classmethod
    def __subclasshook__(cls, subcls: Any) -> Any:  # suppress types in this hack
        if cls is KubernetesModel:
            if any(C.__module__.startswith('kubernetes.client.models.') for C in subcls.__mro__):
                return True
        return NotImplemented


def serialize_kubernetes_model(obj: KubernetesModel) -> dict[str, Any]:
    """
    Convert a kubernetes client model into its API representation.

    The models' own ``to_dict()`` uses the Python attribute names
    (``resource_version``), while the field ownership refers to the API names
    (``resourceVersion``) -- so the client's own API serializer is used.
    The library is surely installed if an instance of its model is given.
    """
    import kubernetes.client
    serialized: dict[str, Any] = kubernetes.client.ApiClient().sanitize_for_serialization(obj)
    return serialized
