from rest_framework import serializers

from utils.dates import is_valid_date, today_string

from .models import AttendanceRecord, DailyBalance, Expense, Staff, WagePayment

DATE_FORMAT_MESSAGE = "Invalid date format. Use YYYY-MM-DD"
POSITIVE_AMOUNT_MESSAGE = "Amount must be a positive number"


class IsoDateField(serializers.CharField):
    """``YYYY-MM-DD`` string that must also be a real calendar date."""

    def __init__(self, **kwargs):
        self.format_message = kwargs.pop("format_message", DATE_FORMAT_MESSAGE)
        error_messages = {"blank": self.format_message, "invalid": self.format_message}
        error_messages.update(kwargs.pop("error_messages", {}))
        super().__init__(error_messages=error_messages, **kwargs)

    def to_internal_value(self, data):
        value = super().to_internal_value(data)
        if not is_valid_date(value):
            raise serializers.ValidationError(self.format_message)
        return value


def _amount_field(**kwargs):
    return serializers.IntegerField(
        min_value=1,
        error_messages={
            "required": POSITIVE_AMOUNT_MESSAGE,
            "null": POSITIVE_AMOUNT_MESSAGE,
            "invalid": POSITIVE_AMOUNT_MESSAGE,
            "min_value": POSITIVE_AMOUNT_MESSAGE,
        },
        **kwargs,
    )


class DateRangeQuerySerializer(serializers.Serializer):
    startDate = IsoDateField(required=False, format_message="Invalid startDate format. Use YYYY-MM-DD")
    endDate = IsoDateField(required=False, format_message="Invalid endDate format. Use YYYY-MM-DD")


class RequiredDateRangeQuerySerializer(DateRangeQuerySerializer):
    startDate = IsoDateField(
        error_messages={"required": "startDate and endDate are required"},
    )
    endDate = IsoDateField(
        error_messages={"required": "startDate and endDate are required"},
    )


class ExpenseQuerySerializer(DateRangeQuerySerializer):
    category = serializers.CharField(required=False, allow_blank=True)

    def validate_category(self, value):
        if not value or value == "all":
            return None
        if value not in Expense.Category.values:
            raise serializers.ValidationError("Invalid category")
        return value


class ExpenseSerializer(serializers.ModelSerializer):
    category = serializers.ChoiceField(
        choices=Expense.Category.choices,
        error_messages={"required": "Category is required", "invalid_choice": "Invalid category"},
    )
    description = serializers.CharField(
        max_length=255,
        error_messages={"required": "Description is required", "blank": "Description is required"},
    )
    amount = _amount_field()
    date = IsoDateField(required=False)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Expense
        fields = ["id", "category", "description", "amount", "date", "createdAt"]
        read_only_fields = ["id"]

    def create(self, validated_data):
        validated_data.setdefault("date", today_string())
        return super().create(validated_data)


class StaffSerializer(serializers.ModelSerializer):
    name = serializers.CharField(
        max_length=120,
        error_messages={"required": "Name is required", "blank": "Name is required"},
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = Staff
        fields = ["id", "name", "active", "createdAt"]
        read_only_fields = ["id", "active"]


class WagePaymentSerializer(serializers.ModelSerializer):
    staffId = serializers.IntegerField(
        source="staff_id",
        min_value=1,
        error_messages={
            "required": "Staff member is required",
            "null": "Staff member is required",
            "invalid": "Staff member is required",
            "min_value": "Staff member is required",
        },
    )
    staffName = serializers.CharField(source="staff.name", read_only=True)
    amount = _amount_field()
    date = IsoDateField(required=False)
    note = serializers.CharField(required=False, allow_blank=True, allow_null=True, max_length=255)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = WagePayment
        fields = ["id", "staffId", "staffName", "amount", "date", "note", "createdAt"]
        read_only_fields = ["id"]

    def validate_note(self, value):
        return (value or "").strip() or None

    def create(self, validated_data):
        validated_data.setdefault("date", today_string())
        return super().create(validated_data)


class AttendanceSerializer(serializers.ModelSerializer):
    staffId = serializers.IntegerField(
        source="staff_id",
        min_value=1,
        error_messages={
            "required": "staffId is required and must be a number",
            "null": "staffId is required and must be a number",
            "invalid": "staffId is required and must be a number",
            "min_value": "staffId is required and must be a number",
        },
    )
    date = IsoDateField(
        format_message="date is required in YYYY-MM-DD format",
        error_messages={"required": "date is required in YYYY-MM-DD format"},
    )
    status = serializers.ChoiceField(
        choices=AttendanceRecord.Status.choices,
        error_messages={
            "required": "status must be one of: present, absent, day_off",
            "invalid_choice": "status must be one of: present, absent, day_off",
        },
    )
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)

    class Meta:
        model = AttendanceRecord
        fields = ["id", "staffId", "date", "status", "createdAt"]
        read_only_fields = ["id"]


class AttendanceUpdateSerializer(serializers.Serializer):
    id = serializers.IntegerField(min_value=1)
    status = serializers.ChoiceField(
        choices=AttendanceRecord.Status.choices,
        error_messages={"invalid_choice": "status must be one of: present, absent, day_off"},
    )


class BalanceSerializer(serializers.ModelSerializer):
    openingBalance = serializers.IntegerField(
        source="opening_balance",
        required=False,
        error_messages={"invalid": "openingBalance must be a number", "null": "openingBalance must be a number"},
    )
    closingBalance = serializers.IntegerField(
        source="closing_balance",
        required=False,
        error_messages={"invalid": "closingBalance must be a number", "null": "closingBalance must be a number"},
    )
    date = IsoDateField(error_messages={"required": "Date is required", "blank": "Date is required"})

    class Meta:
        model = DailyBalance
        fields = ["id", "date", "openingBalance", "closingBalance"]
        read_only_fields = ["id"]

    def validate(self, attrs):
        if "opening_balance" not in attrs and "closing_balance" not in attrs:
            raise serializers.ValidationError(
                {"detail": "At least one of openingBalance or closingBalance is required"}
            )
        return attrs
