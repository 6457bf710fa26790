import pytest

from src.platform.exception.exceptions import DomainError, InvalidStateError
from src.service.box_office.domain.entity.order_entity import Order
from src.service.box_office.domain.entity.payment_entity import Payment
from src.service.box_office.domain.entity.user_entity import UserEntity, UserRole
from src.service.box_office.domain.enum.order_status import OrderStatus
from src.service.box_office.domain.enum.payment_status import PaymentMethod, PaymentStatus
from test.service.box_office.helpers import CUSTOMER


def _order() -> Order:
    return Order.create(
        customer_id=7,
        event_id=1,
        performance_id=1,
        payment_id=3,
        total_amount=90.0,
        customer=CUSTOMER,
    )


class TestOrderStatus:
    def test_orders_start_confirmed(self):
        assert _order().status == OrderStatus.CONFIRMED

    def test_confirmed_to_cancelled(self):
        order = _order()

        assert order.change_status(OrderStatus.CANCELLED)
        assert order.status == OrderStatus.CANCELLED

    def test_cancelled_order_can_still_be_refunded(self):
        order = _order()
        order.change_status(OrderStatus.CANCELLED)

        assert order.change_status(OrderStatus.REFUNDED)

    def test_same_status_reports_no_change(self):
        assert not _order().change_status(OrderStatus.CONFIRMED)

    def test_refunded_order_cannot_be_reopened(self):
        order = _order()
        order.change_status(OrderStatus.REFUNDED)

        with pytest.raises(InvalidStateError):
            order.change_status(OrderStatus.CONFIRMED)


class TestPayment:
    def test_new_payment_is_processing(self):
        payment = Payment.create(customer_id=7, amount=90.0, method=PaymentMethod.CASH, currency='eur')

        assert payment.status == PaymentStatus.PROCESSING
        assert payment.currency == 'EUR'

    @pytest.mark.parametrize('amount', [0, -5])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(DomainError):
            Payment.create(customer_id=7, amount=amount, method=PaymentMethod.CASH)

    def test_currency_code(self):
        with pytest.raises(DomainError):
            Payment.create(customer_id=7, amount=1, method=PaymentMethod.CASH, currency='EURO')

    def test_only_completed_payment_buys_tickets(self):
        payment = Payment.create(customer_id=7, amount=90.0, method=PaymentMethod.PAYPAL)

        with pytest.raises(InvalidStateError):
            payment.ensure_usable_for_purchase()
        payment.complete(transaction_reference='PAY_1').ensure_usable_for_purchase()

    def test_completed_payment_cannot_fail(self):
        payment = Payment.create(customer_id=7, amount=90.0, method=PaymentMethod.PAYPAL)
        completed = payment.complete(transaction_reference='PAY_1')

        with pytest.raises(InvalidStateError):
            completed.fail()
        assert completed.refund().status == PaymentStatus.REFUNDED

    def test_transitions_return_new_objects(self):
        payment = Payment.create(customer_id=7, amount=90.0, method=PaymentMethod.PAYPAL)

        failed = payment.fail()

        assert payment.status == PaymentStatus.PROCESSING
        assert failed.status == PaymentStatus.FAILED


class TestUserAccess:
    def test_customers_see_only_their_own_records(self):
        customer = UserEntity(id=7)

        assert customer.can_access(7)
        assert not customer.can_access(8)

    @pytest.mark.parametrize('role', [UserRole.STAFF, UserRole.MANAGER, UserRole.ADMIN])
    def test_staff_see_everything(self, role):
        assert UserEntity(id=1, role=role).can_access(8)

    def test_staff_is_not_a_supervisor(self):
        assert not UserEntity(id=1, role=UserRole.STAFF).is_supervisor
