"""Agency operations dashboard backend built on django-worktime and django-fxmoney."""
