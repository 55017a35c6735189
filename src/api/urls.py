"""Main API URL router for /api/v1/."""
from django.urls import path, include
from rest_framework.routers import DefaultRouter

from api.v1 import views as v1_views
from benchmarks import benchmark_views
from roi import roi_views

router = DefaultRouter()
router.register(r'people', v1_views.PersonViewSet, basename='person')
router.register(r'roles', v1_views.OrgRoleViewSet, basename='role')
router.register(r'lines-of-business', v1_views.LineOfBusinessViewSet, basename='line-of-business')


app_name = 'api'
urlpatterns = [
    path('', include(router.urls)),

    path('auth/me/', v1_views.MeView.as_view(), name='auth-me'),

    # ROI setup
    path('roi/rates/', roi_views.CommissionRateListView.as_view(), name='roi-rates'),
    path('roi/comp-plans/', roi_views.CompensationPlanListView.as_view(), name='roi-comp-plans'),
    path('roi/monthly-inputs/', roi_views.MonthlyInputListView.as_view(), name='roi-monthly-inputs'),
    path('roi/external-results/', roi_views.ExternalResultListView.as_view(), name='roi-external-results'),

    # Benchmarks setup
    path('benchmarks/role-expectations/', benchmark_views.RoleExpectationView.as_view(), name='benchmarks-role-expectations'),
    path('benchmarks/person-overrides/', benchmark_views.PersonOverrideView.as_view(), name='benchmarks-person-overrides'),

    # Reports
    path('reports/roi/person/', roi_views.PersonRoiReportView.as_view(), name='report-roi-person'),
    path('reports/roi/', roi_views.RoiSummaryReportView.as_view(), name='report-roi'),
    path('reports/benchmarks/', benchmark_views.BenchmarksReportView.as_view(), name='report-benchmarks'),
    path('reports/benchmarks/export/', benchmark_views.BenchmarksExportView.as_view(), name='report-benchmarks-export'),
    path('reports/snapshots/', benchmark_views.SnapshotListView.as_view(), name='report-snapshots'),
    path('reports/snapshots/<uuid:snapshot_id>/', benchmark_views.SnapshotDetailView.as_view(), name='report-snapshot-detail'),
]
