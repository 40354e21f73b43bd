"""
定额/区间计费类别测试
"""
import pytest

from fee_estimator.services.fee_calculation import (
    calculate_advisory_retainer,
    calculate_bankruptcy,
    calculate_criminal,
    calculate_daily_rate,
    calculate_divorce,
    calculate_preservation,
)
from fee_estimator.services.fee_calculation.models import (
    AdvisoryRetainerOptions,
    BankruptcyFeeOptions,
    CriminalFeeOptions,
    DailyRateOptions,
    DivorceFeeOptions,
    NoteCode,
    PreservationFeeOptions,
)


class TestDivorce:

    def test_negotiation_midpoint(self):
        result = calculate_divorce(DivorceFeeOptions())
        assert result.retainer_fee == 350000
        assert result.success_fee == 350000
        assert result.details == ["事件種類: 交渉・調停", "基本報酬: 35万円"]

    def test_litigation_high(self):
        result = calculate_divorce(DivorceFeeOptions(proceeding="litigation", complexity="high"))
        assert result.retainer_fee == 600000
        assert result.success_fee == 600000

    def test_continued(self):
        result = calculate_divorce(DivorceFeeOptions(is_continued=True))
        assert result.retainer_fee == 175000
        assert result.success_fee == 350000

    def test_property_division_in_litigation(self):
        result = calculate_divorce(DivorceFeeOptions(proceeding="litigation", property_amount=500))
        assert result.retainer_fee == 790000
        assert result.success_fee == 1130000
        assert result.has_note(NoteCode.PROPERTY_DIVISION)

    def test_property_division_in_negotiation_uses_two_thirds(self):
        result = calculate_divorce(DivorceFeeOptions(property_amount=500))
        assert result.retainer_fee == 576667
        assert result.success_fee == 803333

    def test_expertise(self):
        result = calculate_divorce(DivorceFeeOptions(complexity="low", expertise_percent=10))
        assert result.retainer_fee == 220000


class TestBankruptcy:

    def test_self_bankruptcy_individual(self):
        result = calculate_bankruptcy(BankruptcyFeeOptions())
        assert result.retainer_fee == 200000
        assert result.success_fee == 0
        assert result.explanatory_note == "報酬金は免責決定を受けたときに限り発生"
        assert result.has_note(NoteCode.SUCCESS_CONDITION)
        assert result.details[0] == "自己破産（個人・非事業者）"

    def test_corporation_label_includes_scale(self):
        result = calculate_bankruptcy(
            BankruptcyFeeOptions(applicant_type="corporation", entity_scale="large")
        )
        assert result.retainer_fee == 1000000
        assert result.details[0] == "自己破産（法人・大規模）"

    def test_civil_rehabilitation_note(self):
        result = calculate_bankruptcy(
            BankruptcyFeeOptions(case_subtype="civil_rehabilitation", applicant_type="sole_proprietor")
        )
        assert result.retainer_fee == 300000
        assert "再生計画認可決定" in result.explanatory_note

    def test_corporate_reorganization(self):
        result = calculate_bankruptcy(BankruptcyFeeOptions(case_subtype="corporate_reorganization"))
        assert result.retainer_fee == 2000000
        assert result.details[0] == "会社更生"

    def test_expertise(self):
        result = calculate_bankruptcy(BankruptcyFeeOptions(expertise_percent=10))
        assert result.retainer_fee == 220000
        assert result.success_fee == 0


class TestPreservation:

    def test_standard_procedure(self):
        result = calculate_preservation(PreservationFeeOptions(amount=500))
        assert result.retainer_fee == 170000
        assert result.success_fee == 170000
        assert result.main_case_retainer == 340000
        assert result.retainer_formula == "本案着手金 34万円 × 1/2"
        assert result.success_formula == "本案報酬金 68万円 × 1/4"
        assert "基本: 着手金1/2" in result.details

    def test_hearing_procedure(self):
        result = calculate_preservation(PreservationFeeOptions(amount=500, procedure="hearing"))
        assert result.retainer_fee == 226667
        assert result.success_fee == 226667
        assert "審尋・口頭弁論を経る場合: 着手金2/3" in result.details

    def test_main_case_minimum_carries_over(self):
        result = calculate_preservation(PreservationFeeOptions(amount=100))
        assert result.retainer_fee == 50000
        assert result.success_fee == 40000
        assert result.main_case_retainer == 100000

    def test_with_main_case_note(self):
        result = calculate_preservation(PreservationFeeOptions(amount=500, with_main_case=True))
        assert result.has_note(NoteCode.WITH_MAIN_CASE)
        assert result.explanatory_note.startswith("報酬金は事件が重大・複雑なとき")

    def test_zero_amount(self):
        result = calculate_preservation(PreservationFeeOptions(amount=0))
        assert result.retainer_fee == 0
        assert result.success_fee == 0
        assert result.main_case_retainer == 0


class TestCriminal:

    def test_simple_midpoint(self):
        result = calculate_criminal(CriminalFeeOptions())
        assert result.retainer_fee == 350000
        assert result.success_fee == 350000
        assert result.explanatory_note == "報酬金は不起訴または略式命令の場合に発生"

    def test_continued_discount_only_for_simple(self):
        simple = calculate_criminal(CriminalFeeOptions(is_continued=True))
        complex_case = calculate_criminal(CriminalFeeOptions(complexity="complex", is_continued=True))
        assert simple.retainer_fee == 175000
        assert complex_case.retainer_fee == 750000
        assert not complex_case.has_note(NoteCode.CONTINUED_REPRESENTATION)

    def test_post_indictment_note(self):
        result = calculate_criminal(CriminalFeeOptions(stage="post_indictment", difficulty="high"))
        assert result.retainer_fee == 500000
        assert "執行猶予" in result.explanatory_note


class TestAdvisoryRetainer:

    def test_business_medium(self):
        result = calculate_advisory_retainer(AdvisoryRetainerOptions(entity_scale="medium"))
        assert result.advisory_monthly_fee == 100000
        assert result.advisory_total_fee == 1200000
        assert result.contract_months == 12
        assert result.retainer_fee == 0

    def test_individual(self):
        result = calculate_advisory_retainer(
            AdvisoryRetainerOptions(client_type="individual", contract_months=6)
        )
        assert result.advisory_monthly_fee == 5000
        assert result.advisory_total_fee == 30000
        assert result.details[-1] == "契約期間: 6ヶ月"

    @pytest.mark.parametrize("months, expected", [("abc", 12), (0, 12), (-3, 12), (3.7, 3), ("24", 24)])
    def test_contract_months_normalization(self, months, expected):
        assert AdvisoryRetainerOptions(contract_months=months).contract_months == expected


class TestDailyRate:

    def test_full_day_midpoint_three_days(self):
        result = calculate_daily_rate(DailyRateOptions(duration="full_day", day_count=3))
        assert result.daily_rate_per_day == 75000
        assert result.daily_rate_total == 225000
        assert result.day_count == 3

    def test_half_day_low(self):
        result = calculate_daily_rate(DailyRateOptions(rate="low"))
        assert result.daily_rate_per_day == 30000
        assert result.daily_rate_total == 30000

    def test_invalid_day_count_defaults_to_one(self):
        assert DailyRateOptions(day_count=None).day_count == 1
