from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("payments", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="payment",
            name="identity_key",
            field=models.CharField(blank=True, max_length=261, null=True, unique=True),
        ),
        migrations.AlterField(
            model_name="payment",
            name="transaction_id",
            field=models.CharField(blank=True, db_index=True, max_length=255, null=True),
        ),
        migrations.AlterField(
            model_name="payment",
            name="order_reference",
            field=models.CharField(blank=True, db_index=True, max_length=255, null=True),
        ),
    ]
