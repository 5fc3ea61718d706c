"""
The apply configurations of the common object metadata (``meta/v1``).

The top-level resources inherit from `ResourceApplyConfiguration`: they get
the type identifiers (``kind`` & ``apiVersion``) as their own fields,
and the metadata as a nested sub-object, which is created lazily
on the first access to any of the metadata fields -- so that the metadata
remains absent in the documents until anything is declared in it.
"""
import dataclasses
import datetime
from collections.abc import Mapping
from typing import Any, ClassVar

from typing_extensions import Self

from kapply._cogs.helpers import timestamps
from kapply._cogs.structs import errors, schemas
from kapply.applyconfigurations import base


@schemas.register
@dataclasses.dataclass
class OwnerReferenceApplyConfiguration(base.ApplyConfiguration):
    SCHEMA: ClassVar[str] = 'io.k8s.apimachinery.pkg.apis.meta.v1.OwnerReference'

    api_version: str | None = base.optional('apiVersion')
    kind: str | None = base.optional('kind')
    name: str | None = base.optional('name')
    uid: str | None = base.optional('uid')
    controller: bool | None = base.optional('controller')
    block_owner_deletion: bool | None = base.optional('blockOwnerDeletion')

    def with_api_version(self, value: str) -> Self:
        self.api_version = value
        return self

    def with_kind(self, value: str) -> Self:
        self.kind = value
        return self

    def with_name(self, value: str) -> Self:
        self.name = value
        return self

    def with_uid(self, value: str) -> Self:
        self.uid = value
        return self

    def with_controller(self, value: bool) -> Self:
        self.controller = value
        return self

    def with_block_owner_deletion(self, value: bool) -> Self:
        self.block_owner_deletion = value
        return self


def owner_reference() -> OwnerReferenceApplyConfiguration:
    """ Construct an empty owner reference to be filled with the ``with_*`` calls. """
    return OwnerReferenceApplyConfiguration()


@schemas.register
@dataclasses.dataclass
class ObjectMetaApplyConfiguration(base.ApplyConfiguration):
    """
    The declared metadata of an object.

    The scalar fields are replaced on every call of their mutators.
    The labels & annotations are merged, the owner references & finalizers
    are appended -- so that they can be accumulated over multiple calls.
    """
    SCHEMA: ClassVar[str] = 'io.k8s.apimachinery.pkg.apis.meta.v1.ObjectMeta'

    name: str | None = base.optional('name')
    generate_name: str | None = base.optional('generateName')
    namespace: str | None = base.optional('namespace')
    uid: str | None = base.optional('uid')
    resource_version: str | None = base.optional('resourceVersion')
    generation: int | None = base.optional('generation', format=schemas.Format.INT64)
    creation_timestamp: datetime.datetime | None = base.optional(
        'creationTimestamp', format=schemas.Format.TIME)
    deletion_timestamp: datetime.datetime | None = base.optional(
        'deletionTimestamp', format=schemas.Format.TIME)
    deletion_grace_period_seconds: int | None = base.optional(
        'deletionGracePeriodSeconds', format=schemas.Format.INT64)
    labels: dict[str, str] | None = base.optional('labels', schemas.FieldKind.MAP)
    annotations: dict[str, str] | None = base.optional('annotations', schemas.FieldKind.MAP)
    owner_references: list[OwnerReferenceApplyConfiguration] | None = base.optional(
        'ownerReferences', schemas.FieldKind.LIST,
        nested=OwnerReferenceApplyConfiguration,
        list_type=schemas.ListType.MAP, list_keys=('uid',))
    finalizers: list[str] | None = base.optional(
        'finalizers', schemas.FieldKind.LIST, list_type=schemas.ListType.SET)

    def with_name(self, value: str) -> Self:
        self.name = value
        return self

    def with_generate_name(self, value: str) -> Self:
        self.generate_name = value
        return self

    def with_namespace(self, value: str) -> Self:
        self.namespace = value
        return self

    def with_uid(self, value: str) -> Self:
        self.uid = value
        return self

    def with_resource_version(self, value: str) -> Self:
        self.resource_version = value
        return self

    def with_generation(self, value: int) -> Self:
        self.generation = base.int64(value)
        return self

    def with_creation_timestamp(self, value: datetime.datetime | str) -> Self:
        self.creation_timestamp = timestamps.parse(value)
        return self

    def with_deletion_timestamp(self, value: datetime.datetime | str) -> Self:
        self.deletion_timestamp = timestamps.parse(value)
        return self

    def with_deletion_grace_period_seconds(self, value: int) -> Self:
        self.deletion_grace_period_seconds = base.int64(value)
        return self

    def with_labels(self, entries: Mapping[str, str]) -> Self:
        """
        Put the entries into the labels, overwriting the existing same-named keys.

        The labels remain unset if no entries are given and none were set before.
        """
        self.labels = _merged(self.labels, entries)
        return self

    def with_annotations(self, entries: Mapping[str, str]) -> Self:
        """
        Put the entries into the annotations, overwriting the existing same-named keys.

        The annotations remain unset if no entries are given and none were set before.
        """
        self.annotations = _merged(self.annotations, entries)
        return self

    def with_owner_references(self, *values: OwnerReferenceApplyConfiguration) -> Self:
        """
        Append the owner references, in the order given, with no de-duplication.

        ``None`` is not a valid reference: it fails the call before any
        of the references are added, so that the builder is not half-modified.
        """
        for value in values:
            if value is None:
                raise ValueError("None value passed to with_owner_references().")
            if not isinstance(value, OwnerReferenceApplyConfiguration):
                raise TypeError(f"Owner references are expected, got {value!r}")
        if values:
            self.owner_references = (self.owner_references or []) + list(values)
        return self

    def with_finalizers(self, *values: str) -> Self:
        """
        Append the finalizers, in the order given, with no de-duplication.
        """
        for value in values:
            if value is None:
                raise ValueError("None value passed to with_finalizers().")
            if not isinstance(value, str):
                raise TypeError(f"Finalizers must be strings, got {value!r}")
        if values:
            self.finalizers = (self.finalizers or []) + list(values)
        return self

    def get_name(self) -> str | None:
        return self.name

    def get_namespace(self) -> str | None:
        return self.namespace


def object_meta() -> ObjectMetaApplyConfiguration:
    return ObjectMetaApplyConfiguration()


def _merged(existing: dict[str, str] | None, entries: Mapping[str, str]) -> dict[str, str] | None:
    if existing is None and not entries:
        return None
    result = existing if existing is not None else {}
    for key, val in entries.items():
        result[key] = val
    return result


@dataclasses.dataclass
class TypeMetaApplyConfiguration(base.ApplyConfiguration):
    kind: str | None = base.optional('kind')
    api_version: str | None = base.optional('apiVersion')

    def with_kind(self, value: str) -> Self:
        self.kind = value
        return self

    def with_api_version(self, value: str) -> Self:
        self.api_version = value
        return self

    def get_kind(self) -> str | None:
        return self.kind

    def get_api_version(self) -> str | None:
        return self.api_version


@dataclasses.dataclass
class ResourceApplyConfiguration(TypeMetaApplyConfiguration):
    """
    A top-level resource: the type identifiers, the metadata, and own fields.

    The metadata mutators are exposed on the resource itself, so that
    the whole object can be built in one chain of calls::

        event('my-event', 'default').with_labels({'app': 'demo'}).with_note('Hello')

    The metadata sub-object is created on the first use of any of them.
    """
    API_VERSION: ClassVar[str]
    KIND: ClassVar[str]
    NAMESPACED: ClassVar[bool] = True

    metadata: ObjectMetaApplyConfiguration | None = base.optional(
        'metadata', schemas.FieldKind.STRUCT, nested=ObjectMetaApplyConfiguration)

    def ensure_metadata(self) -> ObjectMetaApplyConfiguration:
        if self.metadata is None:
            self.metadata = ObjectMetaApplyConfiguration()
        return self.metadata

    def populate(self, data: Mapping[str, Any]) -> Self:
        # There is no mutator for the whole metadata: it is populated field by field.
        if isinstance(data, Mapping) and data.get('metadata') is not None:
            data = dict(data)
            metadata = data.pop('metadata')
            if not isinstance(metadata, Mapping):
                raise errors.SchemaMismatchError(f"The metadata must be an object, got {metadata!r}")
            self.ensure_metadata().populate(metadata)
        return super().populate(data)

    def with_name(self, value: str) -> Self:
        self.ensure_metadata().with_name(value)
        return self

    def with_generate_name(self, value: str) -> Self:
        self.ensure_metadata().with_generate_name(value)
        return self

    def with_namespace(self, value: str) -> Self:
        self.ensure_metadata().with_namespace(value)
        return self

    def with_uid(self, value: str) -> Self:
        self.ensure_metadata().with_uid(value)
        return self

    def with_resource_version(self, value: str) -> Self:
        self.ensure_metadata().with_resource_version(value)
        return self

    def with_generation(self, value: int) -> Self:
        self.ensure_metadata().with_generation(value)
        return self

    def with_creation_timestamp(self, value: datetime.datetime | str) -> Self:
        self.ensure_metadata().with_creation_timestamp(value)
        return self

    def with_deletion_timestamp(self, value: datetime.datetime | str) -> Self:
        self.ensure_metadata().with_deletion_timestamp(value)
        return self

    def with_deletion_grace_period_seconds(self, value: int) -> Self:
        self.ensure_metadata().with_deletion_grace_period_seconds(value)
        return self

    def with_labels(self, entries: Mapping[str, str]) -> Self:
        self.ensure_metadata().with_labels(entries)
        return self

    def with_annotations(self, entries: Mapping[str, str]) -> Self:
        self.ensure_metadata().with_annotations(entries)
        return self

    def with_owner_references(self, *values: OwnerReferenceApplyConfiguration) -> Self:
        self.ensure_metadata().with_owner_references(*values)
        return self

    def with_finalizers(self, *values: str) -> Self:
        self.ensure_metadata().with_finalizers(*values)
        return self

    def get_name(self) -> str | None:
        return self.ensure_metadata().get_name()

    def get_namespace(self) -> str | None:
        return self.ensure_metadata().get_namespace()
