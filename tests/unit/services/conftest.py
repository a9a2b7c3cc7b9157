"""Shared wiring for service tests: one project backed by an in-memory tenant."""

import pytest

from schema import ColumnSpec, ProjectRef
from tests._support.fakes import (
    PROJECT_ID,
    FakeConnectionProvider,
    FakePolicy,
    FakeProjectResolver,
    TenantState,
    in_memory_catalog_factory,
)


@pytest.fixture
def project():
    return ProjectRef(project_id=PROJECT_ID, tenant_database_name="tenant_db_1", organization_id="org-1")


@pytest.fixture
def state():
    tenant = TenantState()
    tenant.tables[("public", "users")] = [
        ColumnSpec(name="id", position=0, type="integer", not_null=True, primary=True),
        ColumnSpec(name="email", position=1, type="varchar(255)"),
    ]
    return tenant


@pytest.fixture
def connections():
    return FakeConnectionProvider()


@pytest.fixture
def make_service(project, state, connections):
    """Build a service of the given class; ``denied`` lists refused policy actions."""

    def _make(service_cls, denied=(), **kwargs):
        policy = FakePolicy(denied=denied)
        service = service_cls(
            FakeProjectResolver({project.project_id: project}),
            policy,
            connections,
            catalog_factory=in_memory_catalog_factory(state),
            **kwargs,
        )
        return service, policy

    return _make
