from django.core.validators import MinValueValidator, MaxValueValidator
from django.db import models


class Course(models.Model):
    # Course numbers are assigned by the registrar, never generated
    id = models.PositiveIntegerField(
        primary_key=True,
        validators=[MinValueValidator(1), MaxValueValidator(99999)]
    )
    title = models.CharField(max_length=100)
    credits = models.PositiveSmallIntegerField(validators=[MaxValueValidator(5)])
    # PROTECT: a department with courses must not disappear underneath them
    department = models.ForeignKey(
        'departments.Department',
        on_delete=models.PROTECT,
        related_name='courses'
    )
    instructors = models.ManyToManyField(
        'instructors.Instructor',
        related_name='courses',
        blank=True
    )

    class Meta:
        ordering = ['id']

    def __str__(self):
        return f"{self.id} - {self.title}"
