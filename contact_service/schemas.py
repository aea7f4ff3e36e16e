from pydantic import BaseModel

class SubmissionCreated(BaseModel):
    message: str = "Form submitted successfully!"

class ErrorOut(BaseModel):
    error: str
