from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Student',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('last_name', models.CharField(max_length=50)),
                ('first_mid_name', models.CharField(max_length=50)),
                ('enrollment_date', models.DateField()),
            ],
            options={
                'ordering': ['last_name', 'first_mid_name'],
                'indexes': [
                    models.Index(fields=['last_name'], name='student_last_name_idx'),
                    models.Index(fields=['enrollment_date'], name='student_enroll_date_idx'),
                ],
            },
        ),
    ]
