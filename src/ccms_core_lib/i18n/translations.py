"""Translation tables and lookup.

Lookup order for ``t(key, lang)``:
1. the string for ``key`` in ``lang``
2. the English string for ``key``
3. ``key`` itself, so a missing translation shows up as its key instead of
   blank text
"""

from typing import Dict

DEFAULT_LANGUAGE = "en"

EN: Dict[str, str] = {
    # Navigation
    "appName": "Cyber Crime Management System",
    "location": "Ahilyanagar",
    "dashboard": "Dashboard",
    "caseManagement": "Case Management",
    "evidenceAnalysis": "Evidence Analysis",
    "aiTools": "AI Investigation Tools",
    "victimSupport": "Victim Support",
    "securitySettings": "Security Settings",
    "masterConfig": "Master Configuration",
    "systemMonitoring": "System Monitoring & Health",

    # Dashboard
    "activeCases": "Active Cases",
    "resolvedToday": "Resolved Today",
    "highPriority": "High Priority",
    "aiDetections": "AI Detections",
    "recentActivity": "Recent Activity",

    # Case Management
    "newCase": "New Case",
    "caseNumber": "Case Number",
    "firNumber": "FIR Number",
    "complaintType": "Complaint Type",
    "status": "Status",
    "priority": "Priority",
    "assignedOfficer": "Assigned Officer",
    "incidentDate": "Incident Date",
    "locationField": "Location",
    "description": "Description",

    # Crime Categories
    "hacking": "Hacking",
    "jobFraud": "Job Fraud",
    "matrimonialFraud": "Matrimonial Fraud",
    "ransomware": "Ransomware",
    "phishing": "Phishing",
    "identityTheft": "Identity Theft",
    "financialFraud": "Financial Fraud",
    "cyberStalking": "Cyber Stalking",
    "onlineHarassment": "Online Harassment",
    "dataBreach": "Data Breach",

    # Statuses
    "pending": "Pending",
    "investigating": "Under Investigation",
    "resolved": "Resolved",
    "closed": "Closed",
    "low": "Low",
    "medium": "Medium",
    "high": "High",
    "critical": "Critical",

    # Ranks
    "sp": "Superintendent of Police",
    "addlSp": "Additional SP",
    "dysp": "Deputy Superintendent of Police",
    "inspector": "Police Inspector",
    "asi": "Assistant Sub Inspector",
    "headConstable": "Head Constable",
    "constable": "Police Constable",

    # Actions
    "create": "Create",
    "edit": "Edit",
    "delete": "Delete",
    "save": "Save",
    "cancel": "Cancel",
    "submit": "Submit",
    "view": "View",
    "search": "Search",
    "logout": "Logout",

    # Messages
    "saveSuccess": "Saved successfully",
    "unauthorized": "You are logged out. Logging in again...",

    # Notifications
    "success": "Success",
    "error": "Error",
    "unauthorizedTitle": "Unauthorized",
    "loadFailed": "Failed to load data",
    "caseCreated": "Case created successfully",
    "caseCreateFailed": "Failed to create case",
    "evidenceUploaded": "Evidence uploaded successfully",
    "evidenceUploadFailed": "Failed to upload evidence",
    "complaintUpdated": "Complaint status updated successfully",
    "complaintUpdateFailed": "Failed to update complaint",
    "fieldSaved": "Form field saved",
    "fieldSaveFailed": "Failed to save form field",
    "settingUpdated": "Security setting updated",
    "settingUpdateFailed": "Failed to update setting",
    "analysisComplete": "Analysis completed",
    "analysisFailed": "Analysis failed",
    "alertSent": "Alert sent",
    "alertFailed": "Failed to send alert",
    "systemTest": "System Test",
    "systemTestMessage": "This is a test message",

    # Error panel
    "somethingWentWrong": "Something went wrong",
    "unexpectedError": "We encountered an unexpected error. Please try again or contact support if the problem persists.",
    "tryAgain": "Try Again",
    "reloadPage": "Reload Page",
}

MR: Dict[str, str] = {
    "appName": "सायबर गुन्हे व्यवस्थापन प्रणाली",
    "location": "अहिल्यानगर",
    "dashboard": "डॅशबोर्ड",
    "caseManagement": "खटला व्यवस्थापन",
    "evidenceAnalysis": "पुरावा विश्लेषण",
    "aiTools": "कृत्रिम बुद्धिमत्ता तपास साधने",
    "victimSupport": "पीडित सहायता",
    "securitySettings": "सुरक्षा सेटिंग्ज",
    "masterConfig": "मुख्य कॉन्फिगरेशन",

    "activeCases": "सक्रिय खटले",
    "resolvedToday": "आज सोडवले",
    "highPriority": "उच्च प्राधान्य",
    "aiDetections": "AI शोध",
    "recentActivity": "अलीकडील क्रियाकलाप",

    "newCase": "नवीन खटला",
    "caseNumber": "खटला क्रमांक",
    "firNumber": "गुन्हा नोंदणी क्रमांक",
    "complaintType": "तक्रारीचा प्रकार",
    "status": "स्थिती",
    "priority": "प्राधान्य",
    "assignedOfficer": "नियुक्त अधिकारी",
    "incidentDate": "घटना दिनांक",
    "locationField": "स्थान",
    "description": "वर्णन",

    "hacking": "हॅकिंग",
    "jobFraud": "नोकरी फसवणूक",
    "matrimonialFraud": "वैवाहिक फसवणूक",
    "ransomware": "रॅन्समवेअर",
    "phishing": "फिशिंग",
    "identityTheft": "ओळख चोरी",
    "financialFraud": "आर्थिक फसवणूक",
    "cyberStalking": "सायबर पाठलाग",
    "onlineHarassment": "ऑनलाइन छळवणूक",
    "dataBreach": "डेटा उल्लंघन",

    "pending": "प्रलंबित",
    "investigating": "तपासात",
    "resolved": "निराकरण झाले",
    "closed": "बंद",
    "low": "कमी",
    "medium": "मध्यम",
    "high": "उच्च",
    "critical": "गंभीर",

    "sp": "पोलीस अधीक्षक",
    "addlSp": "अतिरिक्त पोलीस अधीक्षक",
    "dysp": "उप पोलीस अधीक्षक",
    "inspector": "पोलीस निरीक्षक",
    "asi": "सहाय्यक उप निरीक्षक",
    "headConstable": "मुख्य हवालदार",
    "constable": "पोलीस हवालदार",

    "create": "तयार करा",
    "edit": "संपादित करा",
    "delete": "हटवा",
    "save": "जतन करा",
    "cancel": "रद्द करा",
    "submit": "सबमिट करा",
    "view": "पहा",
    "search": "शोधा",
    "logout": "लॉग आउट",

    "saveSuccess": "यशस्वीरित्या जतन केले",
    "unauthorized": "तुम्ही लॉग आउट झाला आहात. पुन्हा लॉग इन होत आहे...",

    "success": "यशस्वी",
    "error": "त्रुटी",
    "systemTest": "सिस्टम चाचणी",
    "systemTestMessage": "हा एक चाचणी संदेश आहे",
}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": EN,
    "mr": MR,
}

SUPPORTED_LANGUAGES = tuple(TRANSLATIONS)

LANGUAGE_NAMES: Dict[str, str] = {
    "en": "English",
    "mr": "मराठी",
}


def is_supported(lang: str) -> bool:
    return lang in TRANSLATIONS


def t(key: str, lang: str = DEFAULT_LANGUAGE) -> str:
    """Translate ``key`` into ``lang``, falling back to English, then to the key."""
    table = TRANSLATIONS.get(lang, TRANSLATIONS[DEFAULT_LANGUAGE])
    return table.get(key) or TRANSLATIONS[DEFAULT_LANGUAGE].get(key) or key
