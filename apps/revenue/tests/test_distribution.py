import pytest
from dataclasses import replace
from decimal import Decimal
from apps.revenue.distribution import (
    MAX_AMOUNT_CENTS,
    MAX_QUANTITY,
    NO_INVESTMENTS_MESSAGE,
    NO_INVESTORS_MESSAGE,
    NO_PROFIT_MESSAGE,
    InvestmentSnapshot,
    ProductSnapshot,
    calculate_pool_cents,
    calculate_profit_cents,
    from_cents,
    ownership_basis_points,
    plan_distribution,
    share_cents,
    to_cents,
    to_decimal,
)
from apps.revenue.exceptions import InvalidSaleError


def investment(inv_id, user_id, amount, product_id='p1'):
    return InvestmentSnapshot(id=inv_id, product_id=product_id, user_id=user_id, amount=Decimal(amount))


# =============================================================================
# Money helpers
# =============================================================================

class TestMoneyHelpers:
    """Tests for cent conversion."""

    def test_to_cents_floors(self):
        """Sub-cent amounts are floored, never rounded up."""
        assert to_cents(Decimal('19.999')) == 1999
        assert to_cents('0.019') == 1

    def test_to_cents_float_goes_through_str(self):
        """0.29 * 100 in binary floating point would floor to 28."""
        assert to_cents(0.29) == 29
        assert to_cents(19.99) == 1999

    def test_from_cents_two_places(self):
        assert from_cents(1250) == Decimal('12.50')
        assert str(from_cents(0)) == '0.00'

    @pytest.mark.parametrize('value', ['abc', None, True, float('nan'), 'Infinity'])
    def test_to_decimal_rejects_non_numbers(self, value):
        with pytest.raises(ValueError):
            to_decimal(value)


# =============================================================================
# Sale validation
# =============================================================================

class TestSaleValidation:
    """Tests for make_sale_event range rules."""

    def test_zero_manufacturing_cost_is_valid(self, sale_factory):
        """Digital goods have no cost of goods."""
        sale = sale_factory(manufacturing_cost=0)
        assert sale.manufacturing_cost == Decimal('0')

    @pytest.mark.parametrize('amount', [0, '0.00', -5, '-0.01'])
    def test_sale_amount_must_be_positive(self, sale_factory, amount):
        with pytest.raises(InvalidSaleError):
            sale_factory(sale_amount=amount)

    def test_negative_cost_rejected(self, sale_factory):
        with pytest.raises(InvalidSaleError):
            sale_factory(manufacturing_cost='-1.00')

    @pytest.mark.parametrize('quantity', [0, -1, 1.5, '2', True])
    def test_quantity_must_be_positive_int(self, sale_factory, quantity):
        with pytest.raises(InvalidSaleError):
            sale_factory(quantity=quantity)

    @pytest.mark.parametrize('field', ['product_id', 'order_id'])
    def test_blank_ids_rejected(self, sale_factory, field):
        with pytest.raises(InvalidSaleError):
            sale_factory(**{field: '   '})

    def test_non_numeric_amount_rejected(self, sale_factory):
        with pytest.raises(InvalidSaleError):
            sale_factory(sale_amount='a lot')

    def test_kind_is_invalid_argument(self, sale_factory):
        with pytest.raises(InvalidSaleError) as exc_info:
            sale_factory(quantity=0)
        assert exc_info.value.kind == 'invalid-argument'

    def test_amounts_up_to_column_limit_accepted(self, sale_factory):
        sale = sale_factory(
            sale_amount='9999999999.999',
            manufacturing_cost='9999999999.99',
            quantity=MAX_QUANTITY,
        )
        assert to_cents(sale.sale_amount) == MAX_AMOUNT_CENTS

    @pytest.mark.parametrize('field', ['sale_amount', 'manufacturing_cost'])
    def test_amount_above_column_limit_rejected(self, sale_factory, field):
        with pytest.raises(InvalidSaleError):
            sale_factory(**{field: '10000000000.00'})

    def test_quantity_above_column_limit_rejected(self, sale_factory):
        with pytest.raises(InvalidSaleError):
            sale_factory(quantity=MAX_QUANTITY + 1)


# =============================================================================
# Arithmetic
# =============================================================================

class TestArithmetic:
    """Tests for the step functions."""

    def test_profit_uses_floored_unit_cost_times_quantity(self, sale_factory):
        sale = sale_factory(sale_amount='100.00', manufacturing_cost='10.005', quantity=3)
        # 10000 - 1000 * 3
        assert calculate_profit_cents(sale) == 7000

    def test_profit_floored_at_zero(self, sale_factory):
        sale = sale_factory(sale_amount='50.00', manufacturing_cost='100.00')
        assert calculate_profit_cents(sale) == 0

    def test_pool_is_quarter_of_profit_floored(self):
        assert calculate_pool_cents(5000) == 1250
        assert calculate_pool_cents(3) == 0
        assert calculate_pool_cents(7) == 1

    def test_basis_points_floor(self):
        assert ownership_basis_points(1, 3) == 3333
        assert ownership_basis_points(60000, 100000) == 6000

    def test_share_cents_floor(self):
        assert share_cents(1000, 3333) == 333


# =============================================================================
# plan_distribution
# =============================================================================

class TestPlanDistribution:
    """Tests for the full distribution plan."""

    def test_single_investor_owns_whole_round(self, sale_factory):
        """$100 sale, zero cost, one investor with all of a $200 round."""
        sale = sale_factory(sale_amount='100', manufacturing_cost='0')
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=Decimal('200'))

        plan = plan_distribution(sale, product, [investment('i1', 'u1', '200')])

        assert plan.profit_cents == 10000
        assert plan.pool_cents == 2500
        assert plan.investor_count == 1
        assert plan.shares[0].amount == Decimal('25.00')
        assert plan.shares[0].ownership_basis_points == 10000
        assert plan.shares[0].percentage == Decimal('1.000000')

    def test_half_profit_pool(self, sale, product_snapshot, split_investments):
        """$100 sale with $50 cost pays a $12.50 pool."""
        plan = plan_distribution(sale, product_snapshot, split_investments)

        assert plan.profit_cents == 5000
        assert plan.pool_cents == 1250
        assert [s.amount_cents for s in plan.shares] == [750, 500]

    def test_sixty_forty_split_of_ten_dollars(self, sale_factory, product_snapshot, split_investments):
        """$40 profit gives a $10.00 pool split exactly 6.00 / 4.00."""
        sale = sale_factory(sale_amount='40.00', manufacturing_cost='0')

        plan = plan_distribution(sale, product_snapshot, split_investments)

        assert plan.pool_cents == 1000
        assert [s.amount for s in plan.shares] == [Decimal('6.00'), Decimal('4.00')]
        assert [s.investor_id for s in plan.shares] == ['u1', 'u2']
        assert [s.percentage for s in plan.shares] == [Decimal('0.600000'), Decimal('0.400000')]
        assert plan.total_distributed_cents == 1000
        assert plan.message == 'Successfully distributed 10.00 in revenue to 2 investors'

    def test_loss_making_sale_is_terminal(self, sale_factory, product_snapshot, split_investments):
        sale = sale_factory(sale_amount='50.00', manufacturing_cost='100.00')

        plan = plan_distribution(sale, product_snapshot, split_investments)

        assert plan.terminal
        assert plan.message == NO_PROFIT_MESSAGE
        assert plan.shares == ()

    def test_unfunded_product_is_terminal(self, sale, split_investments):
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=Decimal('0'))

        plan = plan_distribution(sale, product, split_investments)

        assert plan.terminal
        assert plan.message == NO_INVESTORS_MESSAGE
        assert plan.total_distributed_cents == 0

    def test_no_investments_is_terminal(self, sale, product_snapshot):
        plan = plan_distribution(sale, product_snapshot, [])

        assert plan.terminal
        assert plan.message == NO_INVESTMENTS_MESSAGE

    def test_skips_missing_user_and_non_positive_amount(self, sale_factory, product_snapshot):
        sale = sale_factory(sale_amount='40.00', manufacturing_cost='0')
        investments = [
            investment('i1', 'u1', '500'),
            investment('i2', None, '300'),
            investment('i3', '', '100'),
            investment('i4', 'u4', '0'),
            investment('i5', 'u5', '-100'),
        ]

        plan = plan_distribution(sale, product_snapshot, investments)

        assert [s.investment_id for s in plan.shares] == ['i1']
        assert plan.investor_count == 1
        assert plan.shares[0].amount == Decimal('5.00')

    def test_sub_cent_shares_are_skipped(self, sale_factory):
        """A 0.01% holder of a 1 cent pool earns nothing and is not counted."""
        sale = sale_factory(sale_amount='0.04', manufacturing_cost='0')
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=Decimal('10000'))
        investments = [investment('i1', 'u1', '9999'), investment('i2', 'u2', '1')]

        plan = plan_distribution(sale, product, investments)

        assert plan.pool_cents == 1
        assert [s.investor_id for s in plan.shares] == []
        assert plan.investor_count == 0
        assert not plan.terminal

    def test_thirds_never_exceed_pool(self, sale_factory):
        sale = sale_factory(sale_amount='1.00', manufacturing_cost='0')
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=Decimal('300'))
        investments = [investment(f'i{n}', f'u{n}', '100') for n in range(3)]

        plan = plan_distribution(sale, product, investments)

        # 25 cent pool, 3333 bps each -> 8 cents each
        assert [s.amount_cents for s in plan.shares] == [8, 8, 8]
        assert plan.total_distributed_cents <= plan.pool_cents

    @pytest.mark.parametrize('sale_amount,amounts', [
        ('999.99', ['0.01', '333.33', '666.65']),
        ('12345.67', ['17', '19', '23', '29', '31', '37']),
        ('0.40', ['1', '1', '1', '1', '1', '1', '1']),
    ])
    def test_total_never_exceeds_pool(self, sale_factory, sale_amount, amounts):
        sale = sale_factory(sale_amount=sale_amount, manufacturing_cost='0')
        funding = sum(Decimal(a) for a in amounts)
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=funding)
        investments = [investment(f'i{n}', f'u{n}', a) for n, a in enumerate(amounts)]

        plan = plan_distribution(sale, product, investments)

        assert plan.total_distributed_cents <= plan.pool_cents
        assert all(s.amount_cents > 0 for s in plan.shares)

    def test_drifted_funding_uses_larger_denominator(self, sale_factory):
        """Funding recorded below the investments cannot over-pay the pool."""
        sale = sale_factory(sale_amount='40.00', manufacturing_cost='0')
        product = ProductSnapshot(id='p1', name='Lamp', current_funding=Decimal('500'))
        investments = [investment('i1', 'u1', '600'), investment('i2', 'u2', '400')]

        plan = plan_distribution(sale, product, investments)

        assert [s.amount for s in plan.shares] == [Decimal('6.00'), Decimal('4.00')]
        assert plan.total_distributed_cents <= plan.pool_cents

    def test_invalid_sale_rejected(self, sale, product_snapshot, split_investments):
        bad_sale = replace(sale, quantity=0)

        with pytest.raises(InvalidSaleError):
            plan_distribution(bad_sale, product_snapshot, split_investments)

    def test_product_must_match_sale(self, sale, split_investments):
        other = ProductSnapshot(id='p2', name='Chair', current_funding=Decimal('1000'))

        with pytest.raises(InvalidSaleError):
            plan_distribution(sale, other, split_investments)

    def test_investments_must_belong_to_product(self, sale, product_snapshot, split_investments):
        stray = investment('x1', 'u9', '500', product_id='p2')

        with pytest.raises(InvalidSaleError):
            plan_distribution(sale, product_snapshot, split_investments + [stray])
