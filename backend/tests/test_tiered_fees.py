"""
分段计费类别测试：民事事件 / 契約締結交渉 / 督促手続
"""
import pytest

from fee_estimator.services.fee_calculation import (
    calculate_civil,
    calculate_negotiation,
    calculate_payment_order,
)
from fee_estimator.services.fee_calculation.models import (
    CivilFeeOptions,
    NegotiationFeeOptions,
    NoteCode,
    PaymentOrderFeeOptions,
)


class TestCivil:

    def test_litigation_500(self):
        """500万円 × 5% + 9万円 = 34万円 / 500万円 × 10% + 18万円 = 68万円"""
        result = calculate_civil(CivilFeeOptions(amount=500))
        assert result.retainer_fee == 340000
        assert result.success_fee == 680000
        assert result.retainer_formula == "500万円 × 5% + 9万円"
        assert result.success_formula == "500万円 × 10% + 18万円"
        assert result.details == ["経済的利益: 500万円"]

    def test_continued_halves_retainer_only(self):
        result = calculate_civil(CivilFeeOptions(amount=500, is_continued=True))
        assert result.retainer_fee == 170000
        assert result.success_fee == 680000
        assert result.retainer_formula == "500万円 × 5% + 9万円 × 1/2"
        assert result.has_note(NoteCode.CONTINUED_REPRESENTATION)

    @pytest.mark.parametrize("amount, retainer, success", [
        (300, 240000, 480000),
        (3000, 1590000, 3180000),
        (3001, 1590300, 3180600),
        (30000, 9690000, 19380000),
        (50000, 13690000, 27380000),
    ])
    def test_tier_boundaries(self, amount, retainer, success):
        result = calculate_civil(CivilFeeOptions(amount=amount))
        assert result.retainer_fee == retainer
        assert result.success_fee == success

    def test_minimum_retainer_dominates(self):
        result = calculate_civil(CivilFeeOptions(amount=100))
        assert result.retainer_fee == 100000
        assert result.success_fee == 160000
        assert result.retainer_formula == "最低着手金 10万円を適用"
        assert result.has_note(NoteCode.MINIMUM_RETAINER)

    def test_negotiation_settlement_two_thirds(self):
        result = calculate_civil(CivilFeeOptions(amount=500, is_negotiation_settlement=True))
        assert result.retainer_fee == 226667
        assert result.success_fee == 453333
        assert result.retainer_formula == "(500万円 × 5% + 9万円) × 2/3"
        assert "調停・示談交渉: 2/3適用" in result.details

    def test_promissory_uses_half_table_and_ignores_settlement(self):
        result = calculate_civil(
            CivilFeeOptions(amount=500, is_promissory=True, is_negotiation_settlement=True)
        )
        assert result.retainer_fee == 170000
        assert result.success_fee == 340000
        assert not result.has_note(NoteCode.NEGOTIATION_SETTLEMENT)

    def test_promissory_minimum_is_five(self):
        result = calculate_civil(CivilFeeOptions(amount=50, is_promissory=True))
        assert result.retainer_fee == 50000

    def test_adjustment_applies_to_both_fees(self):
        result = calculate_civil(CivilFeeOptions(amount=500, adjustment_percent=10))
        assert result.retainer_fee == 374000
        assert result.success_fee == 748000
        assert result.retainer_formula.endswith("× (1+10%)")
        assert "事件内容による調整: +10%" in result.details

    def test_negative_adjustment(self):
        result = calculate_civil(CivilFeeOptions(amount=500, adjustment_percent=-30))
        assert result.retainer_fee == 238000
        assert result.success_fee == 476000
        assert "事件内容による調整: -30%" in result.details

    def test_expertise_surcharge(self):
        result = calculate_civil(CivilFeeOptions(amount=500, expertise_percent=20))
        assert result.retainer_fee == 408000
        assert result.success_fee == 816000
        assert result.has_note(NoteCode.EXPERTISE_SURCHARGE)

    def test_negative_expertise_is_ignored(self):
        result = calculate_civil(CivilFeeOptions(amount=500, expertise_percent=-20))
        assert result.retainer_fee == 340000
        assert not result.has_note(NoteCode.EXPERTISE_SURCHARGE)

    def test_minimum_retainer_after_settlement_and_continued(self):
        """300万円 × 8% = 24万円 → × 2/3 = 16万円 → × 1/2 = 8万円 < 10万円"""
        result = calculate_civil(
            CivilFeeOptions(amount=300, is_negotiation_settlement=True, is_continued=True)
        )
        assert result.retainer_fee == 100000
        assert result.success_fee == 320000
        assert result.retainer_formula == "最低着手金 10万円を適用"
        assert result.has_note(NoteCode.NEGOTIATION_SETTLEMENT)
        assert result.has_note(NoteCode.CONTINUED_REPRESENTATION)
        assert result.has_note(NoteCode.MINIMUM_RETAINER)

    @pytest.mark.parametrize("amount", [1e25, 1e30, 1e100, 1e300])
    def test_very_large_amount_still_calculates(self, amount):
        result = calculate_civil(CivilFeeOptions(amount=amount))
        assert result.retainer_fee == pytest.approx(amount * 0.02 * 10000, rel=1e-9)
        assert result.success_fee == pytest.approx(amount * 0.04 * 10000, rel=1e-9)
        assert result.retainer_formula.endswith("万円 × 2% + 369万円")

    def test_success_only_moves_retainer_into_success(self):
        result = calculate_civil(CivilFeeOptions(amount=500, is_success_only=True))
        assert result.retainer_fee == 0
        assert result.success_fee == 1020000
        assert result.retainer_formula == "着手金なし"
        assert result.success_formula == "報酬金 + 着手金相当額"

    def test_success_only_after_minimum_keeps_floor_note(self):
        result = calculate_civil(CivilFeeOptions(amount=100, is_success_only=True))
        assert result.retainer_fee == 0
        assert result.success_fee == 260000
        assert result.has_note(NoteCode.MINIMUM_RETAINER)
        assert result.has_note(NoteCode.SUCCESS_FEE_ONLY)
        assert result.retainer_formula == "着手金なし"

    @pytest.mark.parametrize("amount", [0, -100, None, "abc", float("nan")])
    def test_non_positive_or_invalid_amount_gives_zero(self, amount):
        result = calculate_civil(CivilFeeOptions(amount=amount))
        assert result.retainer_fee == 0
        assert result.success_fee == 0
        assert result.notes == ()
        assert result.retainer_formula == ""

    def test_adjustment_below_minus_hundred_is_clamped(self):
        result = calculate_civil(CivilFeeOptions(amount=500, adjustment_percent=-150))
        assert result.retainer_fee == 0
        assert result.success_fee == 0

    def test_same_input_same_result(self):
        options = CivilFeeOptions(amount=1234.5, is_continued=True, adjustment_percent=15)
        assert calculate_civil(options) == calculate_civil(options)


class TestNegotiation:

    def test_minimum_retainer(self):
        result = calculate_negotiation(NegotiationFeeOptions(amount=500))
        assert result.retainer_fee == 100000
        assert result.success_fee == 160000
        assert result.details[0] == "契約の経済的利益: 500万円"

    def test_third_tier(self):
        result = calculate_negotiation(NegotiationFeeOptions(amount=5000))
        assert result.retainer_fee == 430000
        assert result.success_fee == 860000
        assert result.retainer_formula == "5,000万円 × 0.5% + 18万円"

    def test_zero_amount(self):
        result = calculate_negotiation(NegotiationFeeOptions(amount=0))
        assert result.retainer_fee == 0
        assert result.success_fee == 0


class TestPaymentOrder:

    def test_payment_order_5000(self):
        result = calculate_payment_order(PaymentOrderFeeOptions(amount=5000))
        assert result.retainer_fee == 430000
        assert result.success_fee == 2190000
        assert result.success_formula == "(5,000万円 × 6% + 138万円) × 1/2"
        assert result.has_note(NoteCode.SUCCESS_CONDITION)
        assert result.litigation_transition_fee == 0

    def test_litigation_transition_difference(self):
        result = calculate_payment_order(
            PaymentOrderFeeOptions(amount=5000, may_escalate_to_litigation=True)
        )
        assert result.litigation_transition_fee == 1760000
        assert "訴訟移行時の追加着手金: 176万円" in result.details

    def test_minimum_retainer_five(self):
        result = calculate_payment_order(
            PaymentOrderFeeOptions(amount=100, may_escalate_to_litigation=True)
        )
        assert result.retainer_fee == 50000
        assert result.success_fee == 80000
        assert result.litigation_transition_fee == 30000

    def test_zero_amount(self):
        result = calculate_payment_order(PaymentOrderFeeOptions(amount=0))
        assert result.retainer_fee == 0
        assert result.success_fee == 0
        assert result.litigation_transition_fee == 0
