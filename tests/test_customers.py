"""
Customers, vehicles and the service catalog, including tenant isolation
"""
import pytest
from datetime import datetime, timezone

from autevo.core.errors import ConflictError, NotFoundError, PreconditionFailedError
from autevo.db.models.service_order import OrderItem, ServiceOrder
from autevo.schemas.customer import CustomerCreate, CustomerUpdate
from autevo.schemas.service import ServiceCreate
from autevo.schemas.vehicle import VehicleCreate
from autevo.services.catalog_service import CatalogService
from autevo.services.customer_service import CustomerService
from autevo.services.vehicle_service import VehicleService

from factories import make_customer, make_service, make_vehicle


async def make_order(session, vehicle, assignee, total=100.0, status="scheduled", service=None):
    order = ServiceOrder(
        tenant_id=vehicle.tenant_id,
        code="OS-2026-1234",
        status=status,
        scheduled_at=datetime(2026, 5, 1, 10, 0, tzinfo=timezone.utc),
        vehicle_id=vehicle.id,
        assigned_to_id=assignee.id,
        subtotal=total,
        total=total,
        items=[OrderItem(service_id=service.id if service else None, custom_name="Polimento", price=total, quantity=1)],
        payments=[],
    )
    session.add(order)
    await session.commit()
    return order


@pytest.mark.asyncio
class TestCustomerService:

    async def test_create_with_inline_vehicle(self, db_session, owner_ctx):
        service = CustomerService(db_session, owner_ctx)
        data = CustomerCreate(
            name="<b>Ana</b> Souza",
            phone="11999990000",
            email="",
            vehicle={"plate": " abc1d23 ", "brand": "Honda", "model": "Civic", "color": "Prata"},
        )

        customer = await service.create(data)
        detail = await service.get(customer.id)

        assert detail["name"] == "Ana Souza"
        assert detail["email"] is None
        assert [v.plate for v in detail["vehicles"]] == ["ABC1D23"]
        assert detail["total_spent"] == 0

    async def test_duplicate_phone_conflicts(self, db_session, owner_ctx, tenant_a):
        await make_customer(db_session, tenant_a, phone="11999990000")
        service = CustomerService(db_session, owner_ctx)

        with pytest.raises(ConflictError):
            await service.create(CustomerCreate(name="Outro Cliente", phone="11999990000"))

    async def test_same_phone_allowed_in_other_tenant(self, db_session, owner_b_ctx, tenant_a):
        await make_customer(db_session, tenant_a, phone="11999990000")

        customer = await CustomerService(db_session, owner_b_ctx).create(
            CustomerCreate(name="Cliente Norte", phone="11999990000")
        )
        assert customer.tenant_id == owner_b_ctx.tenant_id

    async def test_duplicate_inline_plate_rolls_back_customer(self, db_session, owner_ctx, tenant_a):
        existing = await make_customer(db_session, tenant_a)
        await make_vehicle(db_session, existing, plate="ABC1D23")
        service = CustomerService(db_session, owner_ctx)

        with pytest.raises(ConflictError):
            await service.create(CustomerCreate(
                name="Bruno Lima",
                phone="11888880000",
                vehicle={"plate": "abc1d23", "brand": "Fiat", "model": "Uno", "color": "Branco"},
            ))

        page = await service.list()
        assert page["pagination"].total == 1

    async def test_update_phone_collision(self, db_session, owner_ctx, tenant_a):
        await make_customer(db_session, tenant_a, name="Ana Souza", phone="11999990000")
        other = await make_customer(db_session, tenant_a, name="Bruno Lima", phone="11888880000")
        other_id = other.id

        with pytest.raises(ConflictError):
            await CustomerService(db_session, owner_ctx).update(other_id, CustomerUpdate(phone="11999990000"))

    async def test_list_search_and_pagination(self, db_session, owner_ctx, tenant_a):
        for i in range(5):
            await make_customer(db_session, tenant_a, name=f"Cliente {i}", phone=f"1199999000{i}")
        await make_customer(db_session, tenant_a, name="Zelia Ramos", phone="11777770000")

        service = CustomerService(db_session, owner_ctx)
        page = await service.list(page=2, limit=2)
        assert page["pagination"].total == 6
        assert page["pagination"].total_pages == 3
        assert len(page["items"]) == 2

        found = await service.list(search="zelia")
        assert [c.name for c in found["items"]] == ["Zelia Ramos"]

    async def test_quick_search_needs_two_characters(self, db_session, owner_ctx, tenant_a):
        await make_customer(db_session, tenant_a, name="Ana Souza")
        service = CustomerService(db_session, owner_ctx)

        assert await service.search("a") == []
        assert [c.name for c in await service.search("An")] == ["Ana Souza"]

    async def test_total_spent_ignores_canceled_orders(self, db_session, owner_ctx, owner_a, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        vehicle = await make_vehicle(db_session, customer)
        await make_order(db_session, vehicle, owner_a, total=150.0, status="completed")
        await make_order(db_session, vehicle, owner_a, total=90.0, status="canceled")

        detail = await CustomerService(db_session, owner_ctx).get(customer.id)
        assert detail["total_spent"] == 150.0

    async def test_delete_with_orders_fails(self, db_session, owner_ctx, owner_a, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        vehicle = await make_vehicle(db_session, customer)
        await make_order(db_session, vehicle, owner_a)
        customer_id = customer.id

        with pytest.raises(PreconditionFailedError):
            await CustomerService(db_session, owner_ctx).delete(customer_id)

    async def test_delete_soft_deletes_customer_and_vehicles(self, db_session, owner_ctx, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        vehicle = await make_vehicle(db_session, customer)
        customer_id, vehicle_id = customer.id, vehicle.id

        await CustomerService(db_session, owner_ctx).delete(customer_id)

        with pytest.raises(NotFoundError):
            await CustomerService(db_session, owner_ctx).get(customer_id)
        with pytest.raises(NotFoundError):
            await VehicleService(db_session, owner_ctx).get(vehicle_id)

    async def test_other_tenant_customer_looks_missing(self, db_session, owner_b_ctx, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        service = CustomerService(db_session, owner_b_ctx)

        with pytest.raises(NotFoundError) as foreign:
            await service.get(customer.id)
        with pytest.raises(NotFoundError) as missing:
            await service.get("00000000-0000-0000-0000-000000000000")

        assert foreign.value.to_dict() == missing.value.to_dict()

    async def test_other_tenant_customers_are_not_listed(self, db_session, owner_b_ctx, tenant_a):
        await make_customer(db_session, tenant_a)

        page = await CustomerService(db_session, owner_b_ctx).list()
        assert page["items"] == []


@pytest.mark.asyncio
class TestVehicleService:

    async def test_create_requires_customer_in_tenant(self, db_session, owner_b_ctx, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        data = VehicleCreate(customer_id=customer.id, plate="XYZ9A87", brand="VW", model="Gol", color="Preto")

        with pytest.raises(NotFoundError, match="Customer not found"):
            await VehicleService(db_session, owner_b_ctx).create(data)

    async def test_create_loads_customer(self, db_session, owner_ctx, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        data = VehicleCreate(customer_id=customer.id, plate="xyz9a87", brand="VW", model="Gol", color="Preto")

        vehicle = await VehicleService(db_session, owner_ctx).create(data)

        assert vehicle.plate == "XYZ9A87"
        assert vehicle.customer.name == "Ana Souza"

    async def test_plate_unique_per_tenant(self, db_session, owner_ctx, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        await make_vehicle(db_session, customer, plate="XYZ9A87")
        data = VehicleCreate(customer_id=customer.id, plate="XYZ9A87", brand="VW", model="Gol", color="Preto")

        with pytest.raises(ConflictError):
            await VehicleService(db_session, owner_ctx).create(data)

    async def test_delete_with_orders_fails(self, db_session, owner_ctx, owner_a, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        vehicle = await make_vehicle(db_session, customer)
        await make_order(db_session, vehicle, owner_a)
        vehicle_id = vehicle.id

        with pytest.raises(PreconditionFailedError):
            await VehicleService(db_session, owner_ctx).delete(vehicle_id)

    async def test_list_filters_by_customer(self, db_session, owner_ctx, tenant_a):
        ana = await make_customer(db_session, tenant_a, name="Ana Souza", phone="11999990000")
        bruno = await make_customer(db_session, tenant_a, name="Bruno Lima", phone="11888880000")
        await make_vehicle(db_session, ana, plate="AAA1A11")
        await make_vehicle(db_session, bruno, plate="BBB2B22")

        page = await VehicleService(db_session, owner_ctx).list(customer_id=bruno.id)
        assert [v.plate for v in page["items"]] == ["BBB2B22"]


@pytest.mark.asyncio
class TestCatalogService:

    async def test_create_toggle_and_list_active(self, db_session, owner_ctx):
        catalog = CatalogService(db_session, owner_ctx)
        wash = await catalog.create(ServiceCreate(name="Lavagem", base_price=60))
        await catalog.create(ServiceCreate(name="Polimento", base_price=300))

        await catalog.toggle_active(wash.id)

        assert [s.name for s in await catalog.list_active()] == ["Polimento"]
        page = await catalog.list(is_active=False)
        assert [s.name for s in page["items"]] == ["Lavagem"]

    async def test_delete_referenced_service_fails(self, db_session, owner_ctx, owner_a, tenant_a):
        customer = await make_customer(db_session, tenant_a)
        vehicle = await make_vehicle(db_session, customer)
        service = await make_service(db_session, tenant_a)
        await make_order(db_session, vehicle, owner_a, service=service)
        service_id = service.id

        with pytest.raises(PreconditionFailedError, match="Deactivate"):
            await CatalogService(db_session, owner_ctx).delete(service_id)

    async def test_delete_unused_service(self, db_session, owner_ctx, tenant_a):
        service = await make_service(db_session, tenant_a)
        service_id = service.id
        catalog = CatalogService(db_session, owner_ctx)

        await catalog.delete(service_id)

        with pytest.raises(NotFoundError, match="Service not found"):
            await catalog.get(service_id)

    async def test_other_tenant_service_looks_missing(self, db_session, owner_b_ctx, tenant_a):
        service = await make_service(db_session, tenant_a)

        with pytest.raises(NotFoundError, match="Service not found"):
            await CatalogService(db_session, owner_b_ctx).get(service.id)
