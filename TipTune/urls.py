"""
URL configuration for TipTune project.

The `urlpatterns` list routes URLs to views. For more information please see:
    https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""
from django.contrib import admin
from django.urls import path, include
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView, SpectacularSwaggerView
from music.views import (
    AssignTrackGenresView,
    GenreBySlugView,
    GenreChildrenView,
    GenreDetailView,
    GenreDiscoveryView,
    GenreListView,
    GenreParentChainView,
    PopularGenresView,
    RecalculateTrackCountsView,
    TrackGenreDetailView,
    TrackGenresView,
)
from search.views import SearchView, SearchSuggestionsView

urlpatterns = [
    path("", include("django_prometheus.urls")),
    path('admin/', admin.site.urls),
    path("auth/", include("djoser.urls")),
    path("auth/", include("djoser.urls.jwt")),
    path('api/schema/', SpectacularAPIView.as_view(), name='schema'),
    path('api/schema/swagger-ui/', SpectacularSwaggerView.as_view(url_name='schema'), name='swagger-ui'),
    path('api/schema/redoc/', SpectacularRedocView.as_view(url_name='schema'), name='redoc'),

    path("api/search/", SearchView.as_view(), name="search"),
    path("api/search/suggestions/", SearchSuggestionsView.as_view(), name="search-suggestions"),

    path("api/genres/", GenreListView.as_view(), name="genre-list"),
    path("api/genres/discovery/", GenreDiscoveryView.as_view(), name="genre-discovery"),
    path("api/genres/popular/", PopularGenresView.as_view(), name="genre-popular"),
    path("api/genres/recalculate-track-counts/", RecalculateTrackCountsView.as_view(), name="genre-recalculate"),
    path("api/genres/slug/<slug:slug>/", GenreBySlugView.as_view(), name="genre-by-slug"),
    path("api/genres/tracks/<uuid:track_id>/", TrackGenresView.as_view(), name="track-genres"),
    path("api/genres/tracks/<uuid:track_id>/assign/", AssignTrackGenresView.as_view(), name="track-genres-assign"),
    path(
        "api/genres/tracks/<uuid:track_id>/genres/<uuid:genre_id>/",
        TrackGenreDetailView.as_view(),
        name="track-genre-detail",
    ),
    path("api/genres/<uuid:genre_id>/", GenreDetailView.as_view(), name="genre-detail"),
    path("api/genres/<uuid:genre_id>/children/", GenreChildrenView.as_view(), name="genre-children"),
    path("api/genres/<uuid:genre_id>/parent-chain/", GenreParentChainView.as_view(), name="genre-parent-chain"),
]
