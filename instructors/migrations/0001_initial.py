from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Instructor',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('last_name', models.CharField(max_length=50)),
                ('first_mid_name', models.CharField(max_length=50)),
                ('hire_date', models.DateField()),
            ],
            options={
                'ordering': ['last_name', 'first_mid_name'],
            },
        ),
        migrations.CreateModel(
            name='OfficeAssignment',
            fields=[
                ('instructor', models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, primary_key=True, related_name='office_assignment', serialize=False, to='instructors.instructor')),
                ('location', models.CharField(max_length=50)),
            ],
        ),
    ]
