"""
The apply configurations of the ``core/v1`` types referenced by the events.
"""
import dataclasses
from typing import ClassVar

from typing_extensions import Self

from kapply._cogs.structs import schemas
from kapply.applyconfigurations import base


@schemas.register
@dataclasses.dataclass
class ObjectReferenceApplyConfiguration(base.ApplyConfiguration):
    SCHEMA: ClassVar[str] = 'io.k8s.api.core.v1.ObjectReference'

    kind: str | None = base.optional('kind')
    namespace: str | None = base.optional('namespace')
    name: str | None = base.optional('name')
    uid: str | None = base.optional('uid')
    api_version: str | None = base.optional('apiVersion')
    resource_version: str | None = base.optional('resourceVersion')
    field_path: str | None = base.optional('fieldPath')

    def with_kind(self, value: str) -> Self:
        self.kind = value
        return self

    def with_namespace(self, value: str) -> Self:
        self.namespace = value
        return self

    def with_name(self, value: str) -> Self:
        self.name = value
        return self

    def with_uid(self, value: str) -> Self:
        self.uid = value
        return self

    def with_api_version(self, value: str) -> Self:
        self.api_version = value
        return self

    def with_resource_version(self, value: str) -> Self:
        self.resource_version = value
        return self

    def with_field_path(self, value: str) -> Self:
        self.field_path = value
        return self


def object_reference() -> ObjectReferenceApplyConfiguration:
    return ObjectReferenceApplyConfiguration()


@schemas.register
@dataclasses.dataclass
class EventSourceApplyConfiguration(base.ApplyConfiguration):
    SCHEMA: ClassVar[str] = 'io.k8s.api.core.v1.EventSource'

    component: str | None = base.optional('component')
    host: str | None = base.optional('host')

    def with_component(self, value: str) -> Self:
        self.component = value
        return self

    def with_host(self, value: str) -> Self:
        self.host = value
        return self


def event_source() -> EventSourceApplyConfiguration:
    return EventSourceApplyConfiguration()
