from django.http import HttpResponse
from django.shortcuts import get_object_or_404
from drf_spectacular.types import OpenApiTypes
from drf_spectacular.utils import OpenApiParameter, OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from fueltax.api.serializers import (
    EntryIgnoreSerializer,
    EntryListQuerySerializer,
    FuelEntrySerializer,
    FuelEntryWriteSerializer,
    InsufficientDataResponseSerializer,
    QuarterlyReportRequestSerializer,
    QuarterlyReportResponseSerializer,
    TruckSerializer,
)
from fueltax.domain.types import InsufficientDataNotice
from fueltax.models import FuelEntry, Truck
from fueltax.services.entries import create_entries, paginate_entries, set_ignored, update_entry
from fueltax.services.report import (
    InvalidReportRequest,
    ReportAuthenticationError,
    ReportGenerationError,
    generate_report,
)
from fueltax.services.report_export import report_filename, report_to_csv

REPORT_ERROR_RESPONSES = {
    400: OpenApiResponse(description="Invalid year or quarter."),
    401: OpenApiResponse(description="Authentication required."),
    500: OpenApiResponse(description="Report could not be generated."),
}


def _run_report(request, payload):
    """Returns ``(outcome, None)`` on success or ``(None, error_response)``."""
    try:
        outcome = generate_report(
            user_id=request.user.pk,
            year=payload["year"],
            quarter=payload["quarter"],
        )
    except ReportAuthenticationError as exc:
        return None, Response({"detail": str(exc)}, status=status.HTTP_401_UNAUTHORIZED)
    except InvalidReportRequest as exc:
        return None, Response({exc.field_name: [str(exc)]}, status=status.HTTP_400_BAD_REQUEST)
    except ReportGenerationError as exc:
        return None, Response({"detail": str(exc)}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return outcome, None


class QuarterlyReportView(APIView):
    @extend_schema(
        request=QuarterlyReportRequestSerializer,
        responses={
            200: OpenApiResponse(
                response=QuarterlyReportResponseSerializer,
                description="Per-jurisdiction totals, or an insufficient-data message.",
            ),
            **REPORT_ERROR_RESPONSES,
        },
    )
    def post(self, request):
        serializer = QuarterlyReportRequestSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        outcome, error_response = _run_report(request, serializer.validated_data)
        if error_response is not None:
            return error_response
        return Response(outcome.to_payload(), status=status.HTTP_200_OK)


class QuarterlyReportCsvView(APIView):
    @extend_schema(
        parameters=[
            OpenApiParameter("year", OpenApiTypes.INT, OpenApiParameter.QUERY, required=True),
            OpenApiParameter("quarter", OpenApiTypes.INT, OpenApiParameter.QUERY, required=True),
        ],
        responses={
            (200, "text/csv"): OpenApiResponse(response=OpenApiTypes.STR, description="IFTA report CSV."),
            (200, "application/json"): InsufficientDataResponseSerializer,
            **REPORT_ERROR_RESPONSES,
        },
    )
    def get(self, request):
        serializer = QuarterlyReportRequestSerializer(data=request.query_params)
        serializer.is_valid(raise_exception=True)
        year = serializer.validated_data["year"]
        quarter = serializer.validated_data["quarter"]

        outcome, error_response = _run_report(request, serializer.validated_data)
        if error_response is not None:
            return error_response

        if isinstance(outcome, InsufficientDataNotice):
            return Response(outcome.to_payload(), status=status.HTTP_200_OK)

        response = HttpResponse(
            report_to_csv(outcome, year=year, quarter=quarter),
            content_type="text/csv; charset=utf-8",
        )
        response["Content-Disposition"] = f'attachment; filename="{report_filename(year, quarter)}"'
        return response


class FuelEntryListView(APIView):
    @extend_schema(
        parameters=[EntryListQuerySerializer],
        responses={200: OpenApiResponse(response=OpenApiTypes.OBJECT, description="Paginated entries.")},
    )
    def get(self, request):
        query = EntryListQuerySerializer(data=request.query_params)
        query.is_valid(raise_exception=True)

        page = paginate_entries(
            user=request.user,
            page=query.validated_data["page"],
            limit=query.validated_data["limit"],
        )
        page["entries"] = FuelEntrySerializer(page["entries"], many=True).data
        return Response(page, status=status.HTTP_200_OK)

    @extend_schema(
        request=FuelEntryWriteSerializer,
        responses={201: FuelEntrySerializer(many=True)},
    )
    def post(self, request):
        serializer = FuelEntryWriteSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry_data = dict(serializer.validated_data)
        second_fuel = entry_data.pop("secondFuel", None)
        created = create_entries(user=request.user, entry_data=entry_data, second_fuel=second_fuel)
        return Response(FuelEntrySerializer(created, many=True).data, status=status.HTTP_201_CREATED)


class FuelEntryDetailView(APIView):
    def _get_entry(self, request, entry_id: int) -> FuelEntry:
        return get_object_or_404(FuelEntry, pk=entry_id, user=request.user)

    @extend_schema(responses={200: FuelEntrySerializer})
    def get(self, request, entry_id: int):
        return Response(FuelEntrySerializer(self._get_entry(request, entry_id)).data)

    @extend_schema(request=FuelEntryWriteSerializer, responses={200: FuelEntrySerializer})
    def put(self, request, entry_id: int):
        return self._update(request, entry_id, partial=False)

    @extend_schema(request=FuelEntryWriteSerializer, responses={200: FuelEntrySerializer})
    def patch(self, request, entry_id: int):
        return self._update(request, entry_id, partial=True)

    @extend_schema(responses={204: None})
    def delete(self, request, entry_id: int):
        self._get_entry(request, entry_id).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    def _update(self, request, entry_id: int, partial: bool):
        entry = self._get_entry(request, entry_id)
        serializer = FuelEntryWriteSerializer(entry, data=request.data, partial=partial)
        serializer.is_valid(raise_exception=True)

        entry_data = dict(serializer.validated_data)
        second_fuel = entry_data.pop("secondFuel", None)
        entry = update_entry(entry, entry_data=entry_data, second_fuel=second_fuel)[0]
        return Response(FuelEntrySerializer(entry).data, status=status.HTTP_200_OK)


class FuelEntryIgnoreView(APIView):
    @extend_schema(request=EntryIgnoreSerializer, responses={200: FuelEntrySerializer})
    def post(self, request, entry_id: int):
        entry = get_object_or_404(FuelEntry, pk=entry_id, user=request.user)
        serializer = EntryIgnoreSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        entry = set_ignored(entry, serializer.validated_data["isIgnored"])
        return Response(FuelEntrySerializer(entry).data, status=status.HTTP_200_OK)


class TruckListView(APIView):
    @extend_schema(responses={200: TruckSerializer(many=True)})
    def get(self, request):
        trucks = Truck.objects.filter(user=request.user)
        return Response(TruckSerializer(trucks, many=True).data)

    @extend_schema(request=TruckSerializer, responses={201: TruckSerializer})
    def post(self, request):
        serializer = TruckSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        serializer.save(user=request.user)
        return Response(serializer.data, status=status.HTTP_201_CREATED)


class TruckDetailView(APIView):
    @extend_schema(responses={204: None})
    def delete(self, request, truck_id: int):
        get_object_or_404(Truck, pk=truck_id, user=request.user).delete()
        return Response(status=status.HTTP_204_NO_CONTENT)
