from django.urls import path
from django.views.generic import RedirectView, TemplateView

PAGES = ["login", "order", "kitchen", "dashboard", "expenses", "attendance", "wages"]

urlpatterns = [
    path("", RedirectView.as_view(url="/order/", permanent=False), name="home"),
] + [
    path(f"{page}/", TemplateView.as_view(template_name=f"pages/{page}.html"), name=f"page-{page}")
    for page in PAGES
]
