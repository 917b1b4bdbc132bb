from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("identity_key", models.CharField(blank=True, max_length=150, null=True, unique=True)),
                ("transaction_id", models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ("order_reference", models.CharField(blank=True, db_index=True, max_length=100, null=True)),
                ("status", models.CharField(max_length=30)),
                ("amount", models.PositiveBigIntegerField(default=0)),
                ("currency", models.CharField(default="PEN", max_length=3)),
                ("customer_email", models.EmailField(blank=True, max_length=254, null=True)),
                ("raw_answer", models.JSONField(default=dict)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
        ),
    ]
