from django.db import models


class Instructor(models.Model):
    last_name = models.CharField(max_length=50)
    first_mid_name = models.CharField(max_length=50)
    hire_date = models.DateField()

    class Meta:
        ordering = ['last_name', 'first_mid_name']

    @property
    def full_name(self):
        return f"{self.last_name}, {self.first_mid_name}"

    def __str__(self):
        return self.full_name


class OfficeAssignment(models.Model):
    """One office per instructor at most; removed together with the instructor."""
    instructor = models.OneToOneField(
        Instructor,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name='office_assignment'
    )
    location = models.CharField(max_length=50)

    def __str__(self):
        return f"{self.instructor.full_name} @ {self.location}"
