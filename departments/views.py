from django.db import DEFAULT_DB_ALIAS
from rest_framework import viewsets, status
from rest_framework.response import Response

from .exceptions import DepartmentMutationError
from .serializers import DepartmentSerializer, DepartmentUpdateSerializer
from .services import DepartmentService
from .store import DepartmentStore


class DepartmentViewSet(viewsets.ModelViewSet):
    """
    Departments API.

    PUT/PATCH must carry the `version` the client last read; a stale version
    gets 409 with the current row in `currentData`. DELETE is refused with 400
    while any course still belongs to the department.
    """
    serializer_class = DepartmentSerializer
    lookup_value_regex = r'\d+'
    database_alias = DEFAULT_DB_ALIAS

    def get_service(self):
        return DepartmentService(DepartmentStore(using=self.database_alias))

    def get_queryset(self):
        return self.get_service().list_departments()

    def perform_create(self, serializer):
        serializer.instance = self.get_service().create_department(serializer.validated_data)

    def update(self, request, *args, **kwargs):
        partial = kwargs.pop('partial', False)
        serializer = DepartmentUpdateSerializer(data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        fields = dict(serializer.validated_data)
        expected_version = fields.pop('version')

        outcome = self.get_service().update_department(int(kwargs['pk']), expected_version, fields)
        try:
            department = outcome.unwrap()
        except DepartmentMutationError as e:
            return Response(e.payload(), status=e.status_code)

        return Response(DepartmentSerializer(department).data)

    def destroy(self, request, *args, **kwargs):
        outcome = self.get_service().delete_department(int(kwargs['pk']))
        try:
            body = outcome.unwrap()
        except DepartmentMutationError as e:
            return Response(e.payload(), status=e.status_code)

        return Response(body, status=status.HTTP_200_OK)
