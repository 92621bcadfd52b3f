from django.db import models


class Student(models.Model):
    last_name = models.CharField(max_length=50)
    first_mid_name = models.CharField(max_length=50)
    enrollment_date = models.DateField()

    class Meta:
        ordering = ['last_name', 'first_mid_name']
        indexes = [
            models.Index(fields=['last_name'], name='student_last_name_idx'),
            models.Index(fields=['enrollment_date'], name='student_enroll_date_idx'),
        ]

    @property
    def full_name(self):
        return f"{self.last_name}, {self.first_mid_name}"

    def __str__(self):
        return self.full_name
