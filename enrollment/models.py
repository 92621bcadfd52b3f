from django.db import models


class Enrollment(models.Model):
    class Grade(models.IntegerChoices):
        A = 0, 'A'
        B = 1, 'B'
        C = 2, 'C'
        D = 3, 'D'
        F = 4, 'F'

    course = models.ForeignKey(
        'courses.Course',
        on_delete=models.CASCADE,
        related_name='enrollments'
    )
    student = models.ForeignKey(
        'students.Student',
        on_delete=models.CASCADE,
        related_name='enrollments'
    )
    grade = models.PositiveSmallIntegerField(choices=Grade.choices, blank=True, null=True)

    class Meta:
        unique_together = ('student', 'course')
        indexes = [
            models.Index(fields=['student', 'course'], name='enrollment_student_course_idx'),
        ]

    def __str__(self):
        return f"{self.student} -> {self.course}"
