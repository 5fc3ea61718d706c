"""
All the structures coming from the Kubernetes API.

For strict type-checking, they are detailed to the per-field level
(e.g. `TypedDict` instead of just ``Mapping[Any, Any]``) -- as used by
the library. The objects can carry arbitrary fields at runtime,
which are not declared in the type definitions at type-checking time.

.. note::

    The live objects are only read here, never modified. Everything
    that goes back to the API is built with the apply configurations
    (:mod:`kapply.applyconfigurations`), never by patching the live bodies.
"""
from collections.abc import Mapping
from typing import Any, cast

from typing_extensions import Literal, TypedDict

from kapply._cogs.helpers import thirdparty
from kapply._cogs.structs import dicts

Labels = Mapping[str, str]
Annotations = Mapping[str, str]

# The only format known so far. The field is optional in the API.
FieldsType = Literal['FieldsV1']
ManagedFieldsOperation = Literal['Apply', 'Update']


class RawManagedFieldsEntry(TypedDict, total=False):
    manager: str
    operation: ManagedFieldsOperation
    apiVersion: str
    time: str
    fieldsType: FieldsType
    fieldsV1: Mapping[str, Any]
    subresource: str


class RawMeta(TypedDict, total=False):
    uid: str
    name: str
    namespace: str
    labels: Labels
    annotations: Annotations
    finalizers: list[str]
    resourceVersion: str
    deletionTimestamp: str
    creationTimestamp: str
    managedFields: list[RawManagedFieldsEntry]


class RawBody(TypedDict, total=False):
    apiVersion: str
    kind: str
    metadata: RawMeta


#
# Enhanced dict-wrappers for easier typed access to well-known typed fields.
# They never create the missing fields, so the source objects remain intact.
#


class Meta(dicts.MappingView[str, Any]):

    def __init__(self, __src: "Body") -> None:
        super().__init__(__src, 'metadata')

    @property
    def uid(self) -> str | None:
        return cast(str | None, self.get('uid'))

    @property
    def name(self) -> str | None:
        return cast(str | None, self.get('name'))

    @property
    def namespace(self) -> str | None:
        return cast(str | None, self.get('namespace'))

    @property
    def managed_fields(self) -> list[RawManagedFieldsEntry]:
        entries = self.get('managedFields')
        return list(entries) if entries else []


class Body(dicts.MappingView[str, Any]):

    def __init__(self, __src: Mapping[str, Any]) -> None:
        super().__init__(__src)
        self._meta = Meta(self)

    @property
    def metadata(self) -> Meta:
        return self._meta

    @property
    def meta(self) -> Meta:
        return self._meta

    @property
    def raw(self) -> Mapping[str, Any]:
        return self._src


def as_body(obj: Body | Mapping[str, Any] | thirdparty.KubernetesModel) -> Body:
    """
    Accept a live object in any supported form and wrap it for reading.

    Supported are raw dicts as decoded from the API responses,
    already wrapped bodies, and the kubernetes client's models.
    """
    if isinstance(obj, Body):
        return obj
    elif isinstance(obj, thirdparty.KubernetesModel):
        return Body(thirdparty.serialize_kubernetes_model(obj))
    elif isinstance(obj, Mapping):
        return Body(obj)
    else:
        raise TypeError(f"Unsupported object type: {type(obj)!r}. Expected a dict or a model.")


def build_object_reference(
        body: Body,
) -> dict[str, str]:
    """
    Construct an object reference for the per-object logging.

    Keep in mind that some fields can be absent: e.g. ``namespace``
    for cluster resources, or ``uid`` for objects not stored yet.
    """
    ref = dict(
        apiVersion=body.get('apiVersion'),
        kind=body.get('kind'),
        name=body.meta.name,
        uid=body.meta.uid,
        namespace=body.meta.namespace,
    )
    return {key: val for key, val in ref.items() if val}
