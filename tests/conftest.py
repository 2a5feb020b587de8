"""Shared fixtures: small program models reproducing the classic smells."""

from pathlib import Path

import pytest

from smellscope.model import (
    AccessEntity,
    AccessKind,
    ClassEntity,
    FieldEntity,
    MethodEntity,
    ParameterEntity,
    ProgramModel,
    Receiver,
    SwitchEntity,
    TypeTag,
)

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_model_path():
    """JSON model with a message chain and a feature-envious method."""
    return FIXTURES / "sample_model.json"


@pytest.fixture
def chain_program():
    """Client walks person.getDepartment().getManager()."""
    department = ClassEntity(
        id="Department",
        fields=(FieldEntity("self", "manager", TypeTag.REFERENCE),),
        methods=(
            MethodEntity(
                "self",
                "getManager",
                accesses=(AccessEntity("manager", "self"),),
                statement_count=1,
                return_tag=TypeTag.REFERENCE,
            ),
        ),
    )
    person = ClassEntity(
        id="Person",
        fields=(FieldEntity("self", "department", TypeTag.REFERENCE),),
        methods=(
            MethodEntity(
                "self",
                "getDepartment",
                accesses=(AccessEntity("department", "self"),),
                statement_count=1,
                return_tag=TypeTag.REFERENCE,
            ),
        ),
    )
    client = ClassEntity(
        id="Client",
        methods=(
            MethodEntity(
                "self",
                "findManager",
                parameters=(ParameterEntity("person", TypeTag.REFERENCE),),
                accesses=(
                    AccessEntity("getDepartment", "Person", AccessKind.CALL, returns="Department"),
                    AccessEntity(
                        "getManager", "Department", AccessKind.CALL, receiver=Receiver.RESULT
                    ),
                ),
                statement_count=1,
                return_tag=TypeTag.REFERENCE,
            ),
        ),
    )
    return ProgramModel([department, person, client])


@pytest.fixture
def envy_program():
    """Order.computeTotal makes 5 of its 7 accesses to Customer."""
    customer = ClassEntity(
        id="Customer",
        fields=(
            FieldEntity("self", "loyaltyPoints"),
            FieldEntity("self", "region"),
        ),
        methods=(
            MethodEntity(
                "self",
                "getDiscount",
                accesses=(AccessEntity("loyaltyPoints", "self"),),
                statement_count=3,
                branch_count=1,
                return_tag=TypeTag.PRIMITIVE,
            ),
            MethodEntity(
                "self",
                "getRegion",
                accesses=(AccessEntity("region", "self"),),
                statement_count=1,
                return_tag=TypeTag.PRIMITIVE,
            ),
        ),
    )
    order = ClassEntity(
        id="Order",
        fields=(
            FieldEntity("self", "amount"),
            FieldEntity("self", "tax"),
            FieldEntity("self", "customer", TypeTag.REFERENCE, type_name="Customer"),
        ),
        methods=(
            MethodEntity(
                "self",
                "computeTotal",
                accesses=(
                    AccessEntity("amount", "self"),
                    AccessEntity("tax", "self"),
                    AccessEntity("getDiscount", "Customer", AccessKind.CALL),
                    AccessEntity("getRegion", "Customer", AccessKind.CALL),
                    AccessEntity("loyaltyPoints", "Customer"),
                    AccessEntity("getDiscount", "Customer", AccessKind.CALL),
                    AccessEntity("region", "Customer"),
                ),
                statement_count=6,
                branch_count=2,
                return_tag=TypeTag.PRIMITIVE,
            ),
        ),
    )
    return ProgramModel([customer, order])


@pytest.fixture
def switch_program():
    """Employee switches on its 'type' code in four methods, same cases each time."""
    labels = ("ENGINEER", "MANAGER", "SALESMAN")
    methods = tuple(
        MethodEntity(
            "self",
            name,
            accesses=(AccessEntity("type", "self"),),
            statement_count=4,
            branch_count=3,
            return_tag=TypeTag.PRIMITIVE,
            switches=(SwitchEntity("type", labels=labels),),
        )
        for name in ("payAmount", "bonus", "title", "vacationDays")
    )
    employee = ClassEntity(
        id="Employee",
        fields=(
            FieldEntity("self", "type", TypeTag.TYPE_CODE),
            FieldEntity("self", "salary"),
        ),
        methods=methods,
    )
    return ProgramModel([employee])


def _address_params(*names):
    return tuple(ParameterEntity(name, position=i) for i, name in enumerate(names))


@pytest.fixture
def clump_program():
    """(street, city, zipCode, country) travels through three signatures in two classes."""
    shipping = ClassEntity(
        id="ShippingService",
        methods=(
            MethodEntity(
                "self",
                "ship",
                parameters=_address_params("street", "city", "zipCode", "country"),
                statement_count=4,
            ),
            MethodEntity(
                "self",
                "quote",
                parameters=_address_params("street", "city", "zipCode?", "country"),
                statement_count=3,
                return_tag=TypeTag.PRIMITIVE,
            ),
        ),
    )
    billing = ClassEntity(
        id="Billing",
        methods=(
            MethodEntity(
                "self",
                "invoice",
                parameters=_address_params("street", "city", "zipCode", "country"),
                statement_count=5,
            ),
        ),
    )
    return ProgramModel([shipping, billing])
