from django.urls import path
from . import views

urlpatterns = [
    # Pattern compilation
    path('api/compile-regex/', views.compile_regex, name='compile_regex'),

    # Driving the compiled automaton
    path('api/nfa-step/', views.nfa_step, name='nfa_step'),
    path('api/epsilon-closure/', views.compute_epsilon_closure, name='epsilon_closure'),
]
