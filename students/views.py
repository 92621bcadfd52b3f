from django.core.paginator import Paginator, EmptyPage
from django.db import models
from rest_framework import viewsets
from rest_framework.response import Response

from .models import Student
from .serializers import StudentSerializer, StudentDetailSerializer, StudentListQuerySerializer


class StudentViewSet(viewsets.ModelViewSet):
    queryset = Student.objects.all()
    serializer_class = StudentSerializer
    lookup_value_regex = r'\d+'

    def get_serializer_class(self):
        if self.action == 'retrieve':
            return StudentDetailSerializer
        return StudentSerializer

    def list(self, request, *args, **kwargs):
        params = StudentListQuerySerializer(data=request.query_params)
        params.is_valid(raise_exception=True)
        query = params.validated_data

        students = Student.objects.all()
        search = query['search']
        if search:
            students = students.filter(
                models.Q(last_name__icontains=search) |
                models.Q(first_mid_name__icontains=search)
            )

        ordering = query['sortBy']
        if query['sortOrder'] == 'desc':
            ordering = f"-{ordering}"
        students = students.order_by(ordering, 'id')

        # Paginate results
        paginator = Paginator(students, query['pageSize'])
        try:
            page_items = paginator.page(query['page']).object_list
        except EmptyPage:
            page_items = []

        return Response({
            'data': StudentSerializer(page_items, many=True).data,
            'total': paginator.count,
            'page': query['page'],
            'pageSize': query['pageSize'],
        })

    def destroy(self, request, *args, **kwargs):
        student = self.get_object()
        student.delete()
        return Response({'message': 'Student deleted successfully'})
