"""Code Change Taxonomy Buddy: classify before/after code pairs into a change taxonomy."""
