from rest_framework import serializers

from .models import Payment


class PaymentSerializer(serializers.ModelSerializer):
    class Meta:
        model = Payment
        fields = "__all__"
        read_only_fields = [f.name for f in Payment._meta.fields]


class FormTokenCustomerSerializer(serializers.Serializer):
    email = serializers.EmailField()
    firstName = serializers.CharField(required=False, allow_blank=True)
    lastName = serializers.CharField(required=False, allow_blank=True)
    phoneNumber = serializers.CharField(required=False, allow_blank=True)
    identityType = serializers.CharField(required=False, allow_blank=True)
    identityCode = serializers.CharField(required=False, allow_blank=True)
    address = serializers.CharField(required=False, allow_blank=True)
    country = serializers.CharField(required=False, allow_blank=True)
    city = serializers.CharField(required=False, allow_blank=True)
    state = serializers.CharField(required=False, allow_blank=True)
    zipCode = serializers.CharField(required=False, allow_blank=True)


class FormTokenSerializer(serializers.Serializer):
    """
    Input for creating a gateway form token at checkout. ``amount`` is in
    soles; the gateway client converts it to céntimos.
    """

    amount = serializers.DecimalField(max_digits=12, decimal_places=2, min_value=0)
    currency = serializers.CharField(required=False, default="PEN")
    orderId = serializers.CharField(max_length=100)
    customer = FormTokenCustomerSerializer()
    contextMode = serializers.ChoiceField(choices=["TEST", "PRODUCTION", "LIVE"], required=False)


class ConfirmPaymentSerializer(serializers.Serializer):
    email = serializers.EmailField()
    orderId = serializers.CharField(max_length=100)
    # Minor currency units.
    amount = serializers.IntegerField(min_value=0)
