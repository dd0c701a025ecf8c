from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name='Experience',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=200)),
                ('description', models.TextField(blank=True, default='')),
                ('duration_minutes', models.PositiveIntegerField(default=60)),
                ('pricing_type', models.CharField(choices=[('per_session', 'Per session'), ('per_day', 'Per day')], default='per_session', max_length=20)),
                ('max_participants', models.PositiveIntegerField(default=10)),
                ('price_cents', models.PositiveIntegerField(default=0)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
            ],
            options={
                'ordering': ['title'],
            },
        ),
        migrations.CreateModel(
            name='Session',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('session_date', models.DateField()),
                ('start_time', models.TimeField(help_text='Time of day, minute precision')),
                ('status', models.CharField(choices=[('available', 'Available'), ('booked', 'Booked'), ('cancelled', 'Cancelled')], default='available', max_length=20)),
                ('spots_total', models.PositiveIntegerField(default=1)),
                ('spots_available', models.PositiveIntegerField(default=1)),
                ('price_override_cents', models.PositiveIntegerField(blank=True, null=True)),
                ('price_note', models.CharField(blank=True, default='', max_length=200)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('experience', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='sessions', to='calendar_engine.experience')),
            ],
            options={
                'ordering': ['session_date', 'start_time'],
                'indexes': [
                    models.Index(fields=['session_date', 'status'], name='session_date_status_idx'),
                    models.Index(fields=['experience', 'session_date'], name='session_experience_date_idx'),
                ],
            },
        ),
        migrations.CreateModel(
            name='Rental',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('guest_name', models.CharField(blank=True, default='', max_length=200)),
                ('participants', models.PositiveIntegerField(default=1)),
                ('start_date', models.DateField()),
                ('end_date', models.DateField()),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('experience', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='rentals', to='calendar_engine.experience')),
            ],
            options={
                'ordering': ['start_date', 'end_date'],
                'indexes': [
                    models.Index(fields=['start_date', 'end_date'], name='rental_date_range_idx'),
                ],
            },
        ),
    ]
