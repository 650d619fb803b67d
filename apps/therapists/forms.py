from django import forms

from apps.therapists.models import EDITABLE_FIELDS


class TherapistRegistrationForm(forms.Form):
    name = forms.CharField(max_length=120)
    email = forms.EmailField()
    password = forms.CharField(strip=False)
    license = forms.CharField(max_length=64, required=False)
    years = forms.IntegerField(min_value=0, max_value=80, required=False)
    institution = forms.CharField(max_length=200, required=False)
    credentials = forms.FileField(required=False)

    def expertise(self):
        """All submitted expertise values, in submission order"""
        if hasattr(self.data, "getlist"):
            return self.data.getlist("expertise")
        value = self.data.get("expertise")
        if value is None:
            return []
        return value if isinstance(value, list) else [value]


class ProfileUpdateForm(forms.Form):
    name = forms.CharField(max_length=120, required=False)
    role = forms.CharField(max_length=80, required=False)
    status = forms.CharField(max_length=80, required=False)

    def clean(self):
        cleaned_data = super().clean()
        for field in EDITABLE_FIELDS:
            value = self.data.get(field)
            # JSON bodies can carry lists, objects or numbers
            if value is not None and not isinstance(value, str):
                self.add_error(field, "Must be a string.")
        if "name" in self.data and "name" not in self.errors and not cleaned_data.get("name"):
            self.add_error("name", "Name cannot be empty.")
        return cleaned_data

    def changes(self):
        """Only the fields the caller actually sent"""
        return {
            field: self.cleaned_data[field]
            for field in EDITABLE_FIELDS
            if field in self.data
        }
