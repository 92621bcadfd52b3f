import django.core.validators
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('departments', '0001_initial'),
        ('instructors', '0001_initial'),
    ]

    operations = [
        migrations.CreateModel(
            name='Course',
            fields=[
                ('id', models.PositiveIntegerField(primary_key=True, serialize=False, validators=[django.core.validators.MinValueValidator(1), django.core.validators.MaxValueValidator(99999)])),
                ('title', models.CharField(max_length=100)),
                ('credits', models.PositiveSmallIntegerField(validators=[django.core.validators.MaxValueValidator(5)])),
                ('department', models.ForeignKey(on_delete=django.db.models.deletion.PROTECT, related_name='courses', to='departments.department')),
                ('instructors', models.ManyToManyField(blank=True, related_name='courses', to='instructors.instructor')),
            ],
            options={
                'ordering': ['id'],
            },
        ),
    ]
