import pytest

from src.service.box_office.domain.enum.inventory_adjustment_kind import InventoryAdjustmentKind
from src.service.box_office.domain.enum.ticket_status import TicketPaymentStatus, TicketStatus


class TestTicketStatusAliases:
    @pytest.mark.parametrize(
        'raw, expected',
        [
            ('active', TicketStatus.PURCHASED),
            ('checked-in', TicketStatus.USED),
            ('checked_in', TicketStatus.USED),
            ('Checked-In', TicketStatus.USED),
            (' purchased ', TicketStatus.PURCHASED),
            ('CANCELLED', TicketStatus.CANCELLED),
        ],
    )
    def test_legacy_values_map_to_canonical_status(self, raw, expected):
        assert TicketStatus(raw) is expected

    def test_paid_means_completed(self):
        assert TicketPaymentStatus('paid') is TicketPaymentStatus.COMPLETED

    def test_unknown_value_is_rejected(self):
        with pytest.raises(ValueError):
            TicketStatus('lost')

    def test_canonical_value_is_what_gets_stored(self):
        assert TicketStatus('active').value == 'purchased'


class TestInventoryOccupancy:
    @pytest.mark.parametrize(
        'status', [TicketStatus.RESERVED, TicketStatus.PURCHASED, TicketStatus.USED]
    )
    def test_held_statuses_occupy_a_unit(self, status):
        assert status.occupies_inventory

    @pytest.mark.parametrize('status', [TicketStatus.CANCELLED, TicketStatus.REFUNDED])
    def test_released_statuses_do_not(self, status):
        assert not status.occupies_inventory

    def test_only_manual_override_is_outside_the_workflows(self):
        assert not InventoryAdjustmentKind.MANUAL_OVERRIDE.is_workflow
        assert InventoryAdjustmentKind.CANCELLATION.is_workflow
