"""Defaults written on first run, and returned whenever a stored collection is unreadable."""

from __future__ import annotations

from typing import Any

SEED_SESSION = "2024-2025"

FEE_STRUCTURES: list[dict[str, Any]] = [
    {"id": "F_ADM_PG8", "name": "Admission P.G to 8th", "amount": 5000, "dueDate": "2024-04-15", "session": SEED_SESSION},
    {"id": "F_REG_910", "name": "Registration 9th & 10th", "amount": 2500, "dueDate": "2024-04-15", "session": SEED_SESSION},
    {"id": "F_CLASS", "name": "Class fees", "amount": 3000, "dueDate": "2024-05-10", "session": SEED_SESSION},
    {"id": "F_INST", "name": "Instalments", "amount": 8000, "dueDate": "2024-08-10", "session": SEED_SESSION},
    {"id": "F_EXAM", "name": "Exam fees", "amount": 500, "dueDate": "2024-09-01", "session": SEED_SESSION},
    {"id": "F_BACK", "name": "Back year fees", "amount": 0, "dueDate": "2024-04-01", "session": SEED_SESSION},
    {"id": "F_ID", "name": "Id proof fees", "amount": 150, "dueDate": "2024-04-20", "session": SEED_SESSION},
    {"id": "F_UNI", "name": "Uniform and book fees", "amount": 4500, "dueDate": "2024-04-10", "session": SEED_SESSION},
    {"id": "F_TRANS", "name": "Transport fees", "amount": 1200, "dueDate": "2024-05-01", "session": SEED_SESSION},
    {"id": "F_UNK", "name": "Unknown", "amount": 0, "dueDate": "2024-12-31", "session": SEED_SESSION},
]


def _student(sid: str, name: str, grade: str, parent: str, contact: str, fees: list[str]) -> dict[str, Any]:
    return {
        "id": sid,
        "name": name,
        "role": "STUDENT",
        "grade": grade,
        "parentName": parent,
        "contact": contact,
        "feeStructureIds": fees,
        "session": SEED_SESSION,
    }


MOCK_STUDENTS: list[dict[str, Any]] = [
    _student("ST001", "Alice Johnson", "10th", "Robert Johnson", "555-0101", ["F_REG_910", "F_CLASS", "F_EXAM", "F_ID"]),
    _student("ST002", "Bob Smith", "8th", "Sarah Smith", "555-0102", ["F_ADM_PG8", "F_CLASS", "F_UNI", "F_TRANS"]),
    _student("ST003", "Charlie Brown", "11th", "Lucy Brown", "555-0103", ["F_CLASS", "F_TRANS", "F_INST"]),
    _student("ST004", "Diana Prince", "12th", "Hippolyta", "555-0104", ["F_CLASS", "F_EXAM", "F_TRANS", "F_ID"]),
    _student("ST005", "Evan Wright", "9th", "John Wright", "555-0105", ["F_REG_910", "F_CLASS"]),
]

MOCK_PAYMENTS: list[dict[str, Any]] = [
    {"id": "P001", "studentId": "ST001", "feeStructureId": "F_CLASS", "amountPaid": 1500, "date": "2024-08-02", "method": "ONLINE", "session": SEED_SESSION},
    {"id": "P002", "studentId": "ST001", "feeStructureId": "F_ID", "amountPaid": 150, "date": "2024-08-02", "method": "ONLINE", "session": SEED_SESSION},
    {"id": "P003", "studentId": "ST002", "feeStructureId": "F_ADM_PG8", "amountPaid": 5000, "date": "2024-07-28", "method": "CHECK", "session": SEED_SESSION},
    {"id": "P004", "studentId": "ST003", "feeStructureId": "F_CLASS", "amountPaid": 1000, "date": "2024-08-05", "method": "CASH", "session": SEED_SESSION},
    {"id": "P005", "studentId": "ST004", "feeStructureId": "F_CLASS", "amountPaid": 3000, "date": "2024-08-01", "method": "ONLINE", "session": SEED_SESSION},
    {"id": "P006", "studentId": "ST004", "feeStructureId": "F_EXAM", "amountPaid": 500, "date": "2024-09-10", "method": "ONLINE", "session": SEED_SESSION},
]

MOCK_EXPENSES: list[dict[str, Any]] = [
    {"id": 1, "category": "💸 Salaries", "description": "Monthly staff salaries", "amount": 45000, "date": "2024-09-01", "session": SEED_SESSION},
    {"id": 2, "category": "💡 Utilities", "description": "Electricity bill for August", "amount": 3200, "date": "2024-09-05", "session": SEED_SESSION},
    {"id": 3, "category": "🔧 Maintenance", "description": "Plumbing repairs in block A", "amount": 1500, "date": "2024-09-10", "session": SEED_SESSION},
    {"id": 4, "category": "📝 Supplies", "description": "Office stationery and markers", "amount": 2100, "date": "2024-09-12", "session": SEED_SESSION},
    {"id": 5, "category": "🎉 Events", "description": "Teachers Day celebration", "amount": 5000, "date": "2024-09-15", "session": SEED_SESSION},
]

MOCK_STAFF: list[dict[str, Any]] = [
    {"id": "ADM001", "name": "Admin Principal", "role": "ADMIN", "avatar": "https://picsum.photos/100/100"},
    {"id": "EMP001", "name": "John Bursar", "role": "EMPLOYEE", "avatar": "https://picsum.photos/101/101"},
]

DEFAULT_SCHOOL_PROFILE: dict[str, Any] = {
    "name": "The Education Hills 🎓",
    "tagline": "Knowledge Is Power ✨",
    "address": "123 Academic Avenue, Knowledge City, ED 54321",
    "website": "www.educationhills.edu",
    "phone": "+1 (555) 123-4567",
    "sessions": ["2022-2023", "2023-2024", SEED_SESSION],
    "currentSession": SEED_SESSION,
    "logo": "",
    "backgroundImage": "https://images.unsplash.com/photo-1523050854058-8df90110c9f1?ixlib=rb-4.0.3&auto=format&fit=crop&w=2000&q=80",
    "affiliation": "CBSE Board",
    "institutionType": "Co-Education",
    "feesReceiptTerms": (
        "1. Fees once paid are not refundable.\n"
        "2. Please keep this receipt safely for future reference.\n"
        "3. Cheques are subject to realization."
    ),
    "sliderImages": [
        {
            "id": "1",
            "url": "https://images.unsplash.com/photo-1562774053-701939374585?ixlib=rb-1.2.1&auto=format&fit=crop&w=1950&q=80",
            "title": "Empowering Future Leaders",
            "subtitle": "Excellence in Education Since 1995",
        },
        {
            "id": "2",
            "url": "https://images.unsplash.com/photo-1523050854058-8df90110c9f1?ixlib=rb-4.0.3&auto=format&fit=crop&w=2000&q=80",
            "title": "State-of-the-Art Library",
            "subtitle": "Knowledge at your fingertips",
        },
        {
            "id": "3",
            "url": "https://images.unsplash.com/photo-1509062522246-3755977927d7?ixlib=rb-1.2.1&auto=format&fit=crop&w=1950&q=80",
            "title": "Modern Classrooms",
            "subtitle": "Technology driven learning environment",
        },
    ],
}

DEFAULT_CLASSES: list[str] = ["8th", "9th", "10th", "11th", "12th"]
