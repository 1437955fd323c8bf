from django.urls import include, path

urlpatterns = [
    path('', include('regex_automaton.urls')),
]
